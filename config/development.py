import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "roster123"),
    "database": os.getenv("DB_NAME", "roster_db"),
}

# Ano da escala (meses 0..11 deste ano)
ROSTER_YEAR = int(os.getenv("ROSTER_YEAR", "2026"))

# Default admin kept by ensure_admin_exists
ADMIN_NUM = os.getenv("ADMIN_NUM", "142.924-0")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed default sections/legends on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))

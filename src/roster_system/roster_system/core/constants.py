"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ROSTER_YEAR = 2026
DEFAULT_CARGA = "6h"

# Codes of the "present" family: full day, morning, afternoon.
PRESENT_CODES = frozenset({"P", "PM", "PT"})

# Hours of a present day, by shift profile and weekday (0=Mon ... 6=Sun).
HOURS_6H = {0: 6.0, 1: 8.5, 2: 6.0, 3: 8.5, 4: 6.0, 5: 8.0, 6: 8.0}
HOURS_8H = {0: 8.0, 1: 8.0, 2: 4.5, 3: 8.0, 4: 8.0, 5: 8.0, 6: 8.0}

# Unit rank ladder, higher value sorts first.
RANK_ORDER = {
    "Ten-Cel": 13,
    "Maj": 12,
    "Cap": 11,
    "1º Ten": 10,
    "2º Ten": 9,
    "Sub Ten": 8,
    "1º Sgt": 7,
    "2º Sgt": 6,
    "3º Sgt": 5,
    "Cb": 4,
    "Sd": 3,
    "Sd 2ª Cl": 2,
    "Civil": 1,
}

DEFAULT_ADMIN_NUM = "142.924-0"
DEFAULT_ADMIN_NAME = "Administrador do Sistema"

MIN_PASSWORD_LENGTH = 4
MAX_DAY = 31
# militares.id is a signed INT
MAX_MILITAR_ID = 2**31 - 1

"""Exemplo: usar a camada de serviços sem passar pelo Flask.

Imprime o total de horas do mês corrente de cada militar.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.roster_system.roster_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, year=settings.ROSTER_YEAR)
    report = container.hours_service.build_month(date.today().month - 1)
    for row in report.rows:
        print(f"{row.militar.secao:6} {row.militar.posto:8} {row.militar.nome:40} {row.total:6.1f}h")


if __name__ == "__main__":
    main()

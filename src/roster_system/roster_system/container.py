from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_ROSTER_YEAR
from .database.connection import DatabaseConnection, DBConfig
from .escala.mysql_roster_repository import MySQLRosterRepository
from .escala.service import RosterService
from .hours.service import MonthlyHoursService
from .legendas.mysql_legenda_repository import MySQLLegendaRepository
from .militares.mysql_militar_repository import MySQLMilitarRepository
from .militares.service import AuthService, MilitarService
from .secoes.mysql_secao_repository import MySQLSecaoRepository
from .secoes.service import SecaoService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    militar_service: MilitarService
    secao_service: SecaoService
    roster_service: RosterService
    hours_service: MonthlyHoursService


def build_services(*, militares, secoes, legendas, roster, year: int = DEFAULT_ROSTER_YEAR) -> Container:
    """Wire services on top of any repository implementation."""

    return Container(
        auth_service=AuthService(militares),
        militar_service=MilitarService(militares),
        secao_service=SecaoService(secoes),
        roster_service=RosterService(roster, militares, secoes),
        hours_service=MonthlyHoursService(roster, militares, legendas, year=year),
    )


def build_container(*, db_config: dict, year: int = DEFAULT_ROSTER_YEAR) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        militares=MySQLMilitarRepository(conn),
        secoes=MySQLSecaoRepository(conn),
        legendas=MySQLLegendaRepository(conn),
        roster=MySQLRosterRepository(conn),
        year=year,
    )

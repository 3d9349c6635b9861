from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

import pandas as pd

from ..common import datetime_utils
from ..core.constants import DEFAULT_CARGA, DEFAULT_ROSTER_YEAR, RANK_ORDER
from ..core.exceptions import ValidationError
from ..escala.model import GridKey
from ..escala.repository import RosterRepository
from ..legendas.model import Legenda
from ..legendas.repository import LegendaRepository
from ..militares.model import Militar
from ..militares.repository import MilitarRepository
from .calculator.base import HoursCalculator
from .calculator.duty_calculator import DutyHoursCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MilitarHours:
    militar: Militar
    horas: float
    horas_extras: float
    pending_days: list[int] = field(default_factory=list)
    status_hoje: Optional[Legenda] = None

    @property
    def total(self) -> float:
        return self.horas + self.horas_extras

    def to_dict(self) -> dict:
        return {
            "militar": self.militar.to_public_dict(),
            "horas": round(self.horas, 2),
            "horasExtras": round(self.horas_extras, 2),
            "total": round(self.total, 2),
            "pendentes": list(self.pending_days),
            "statusHoje": self.status_hoje.to_dict() if self.status_hoje else None,
        }


@dataclass(frozen=True)
class MonthReport:
    year: int
    mes: int
    days_in_month: int
    rows: list[MilitarHours]

    def to_dict(self) -> dict:
        return {
            "ano": self.year,
            "mes": self.mes,
            "dias": self.days_in_month,
            "militares": [r.to_dict() for r in self.rows],
        }


def rank_value(posto: str) -> int:
    return RANK_ORDER.get(posto or "", 0)


def sort_key(m: Militar) -> tuple:
    # Section alphabetical, then highest rank first.
    return (m.secao or "", -rank_value(m.posto))


def _matches(m: Militar, search: str) -> bool:
    return (
        search in m.nome.lower()
        or search in m.num.lower()
        or search in (m.secao or "").lower()
        or search in (m.posto or "").lower()
    )


class MonthlyHoursService:
    def __init__(
        self,
        roster: RosterRepository,
        militares: MilitarRepository,
        legendas: LegendaRepository,
        *,
        year: int = DEFAULT_ROSTER_YEAR,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._roster = roster
        self._militares = militares
        self._legendas = legendas
        self._year = int(year)
        self._calculator = calculator or DutyHoursCalculator()

    @property
    def year(self) -> int:
        return self._year

    def build_month(
        self,
        mes: int,
        *,
        secoes: Optional[Iterable[str]] = None,
        search: Optional[str] = None,
        today: Optional[date] = None,
    ) -> MonthReport:
        if not 0 <= int(mes) <= 11:
            raise ValidationError("Mês inválido (0 a 11)")
        mes = int(mes)

        snapshot = self._roster.load_month(mes)
        legendas = {l.sigla: l for l in self._legendas.list_all()}
        n_days = datetime_utils.days_in_month(self._year, mes)
        weekdays = {d: datetime_utils.weekday_of(self._year, mes, d) for d in range(1, n_days + 1)}

        today = today or datetime_utils.today()
        today_day = today.day if (today.year == self._year and today.month - 1 == mes) else None

        militares = list(self._militares.list_all())
        if secoes is not None:
            wanted = set(secoes)
            militares = [m for m in militares if m.secao in wanted]
        if search:
            needle = search.strip().lower()
            militares = [m for m in militares if _matches(m, needle)]
        militares.sort(key=sort_key)

        rows: list[MilitarHours] = []
        for m in militares:
            horas = 0.0
            extras = 0.0
            pending: list[int] = []
            status_hoje = None

            for dia in range(1, n_days + 1):
                key = GridKey(militar_id=m.id, mes=mes, dia=dia)
                sigla = snapshot.escala.get(key)
                legenda = legendas.get(sigla) if sigla else None
                carga = snapshot.cargas_diarias.get(key) or m.carga_horaria or DEFAULT_CARGA

                day = self._calculator.day_hours(sigla=sigla, legenda=legenda, weekday=weekdays[dia], carga=carga)
                horas += day.hours
                if day.pending:
                    pending.append(dia)

                he = snapshot.horas_extras.get(key)
                if he:
                    extras += he.val

                if dia == today_day:
                    status_hoje = legenda

            rows.append(
                MilitarHours(
                    militar=m,
                    horas=horas,
                    horas_extras=extras,
                    pending_days=pending,
                    status_hoje=status_hoje,
                )
            )

        return MonthReport(year=self._year, mes=mes, days_in_month=n_days, rows=rows)

    def export_month(
        self,
        mes: int,
        *,
        secoes: Optional[Iterable[str]] = None,
        search: Optional[str] = None,
    ) -> bytes:
        """Monthly hours summary as an .xlsx workbook, same filters as build_month."""

        report = self.build_month(mes, secoes=secoes, search=search)
        df = pd.DataFrame(
            [
                (
                    r.militar.secao,
                    r.militar.posto,
                    r.militar.nome,
                    r.militar.num,
                    r.militar.carga_horaria,
                    round(r.horas, 2),
                    round(r.horas_extras, 2),
                    round(r.total, 2),
                    len(r.pending_days),
                )
                for r in report.rows
            ],
            columns=["Seção", "Posto", "Nome", "Matrícula", "Carga", "Horas", "H. Extras", "Total", "Dias pendentes"],
        )

        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=f"{mes + 1:02d}-{report.year}")
        logger.info("Exported hours of %02d/%d (%d militares)", mes + 1, report.year, len(report.rows))
        return out.getvalue()

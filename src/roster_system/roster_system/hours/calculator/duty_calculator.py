from __future__ import annotations

from typing import Iterable, Optional

from ...core.constants import HOURS_6H, HOURS_8H, PRESENT_CODES
from ...core.enums import CargaHoraria
from ...legendas.model import Legenda
from .base import DayHours, HoursCalculator

_PROFILE_TABLES = {
    CargaHoraria.SEIS.value: HOURS_6H,
    CargaHoraria.OITO.value: HOURS_8H,
}


class DutyHoursCalculator(HoursCalculator):
    """Unit rule for one roster day.

    - no code: 0h, day is pending
    - present code (P/PM/PT): hours by shift profile and weekday
      (6h: Mon/Wed/Fri 6.0, Tue/Thu 8.5, Sat/Sun 8.0; 8h: Wed 4.5, else 8.0)
    - any other code: the legend's fixed hours (0 when the code has no legend)
    """

    def __init__(self, present_codes: Iterable[str] = PRESENT_CODES):
        self._present_codes = frozenset(present_codes)

    def is_present(self, sigla: str) -> bool:
        return sigla in self._present_codes

    def day_hours(
        self,
        *,
        sigla: Optional[str],
        legenda: Optional[Legenda],
        weekday: int,
        carga: str,
    ) -> DayHours:
        if not sigla:
            return DayHours(hours=0.0, pending=True)

        fixed = legenda.horas if legenda else 0.0
        if self.is_present(sigla):
            table = _PROFILE_TABLES.get(carga)
            if table is None:
                return DayHours(hours=fixed)
            return DayHours(hours=table[weekday])
        return DayHours(hours=fixed)

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...legendas.model import Legenda


@dataclass(frozen=True)
class DayHours:
    hours: float
    pending: bool = False


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for the daily hour rule)."""

    @abstractmethod
    def day_hours(
        self,
        *,
        sigla: Optional[str],
        legenda: Optional[Legenda],
        weekday: int,
        carga: str,
    ) -> DayHours:
        raise NotImplementedError

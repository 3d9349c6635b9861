from __future__ import annotations

from typing import Protocol, Sequence

from .model import Legenda


class LegendaRepository(Protocol):
    """Legend codes are read here; writes go through the roster sync."""

    def list_all(self) -> Sequence[Legenda]:
        raise NotImplementedError

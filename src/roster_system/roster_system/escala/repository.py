from __future__ import annotations

from typing import Protocol

from .model import RosterSnapshot


class RosterRepository(Protocol):
    def load(self) -> RosterSnapshot:
        """Read every grid table (escala, overtime, overrides, notices, legends)."""

        raise NotImplementedError

    def load_month(self, mes: int) -> RosterSnapshot:
        """Read escala, overtime and overrides of one month only."""

        raise NotImplementedError

    def replace_all(self, snapshot: RosterSnapshot) -> None:
        """Delete and re-insert every grid table in a single transaction."""

        raise NotImplementedError

from __future__ import annotations

import logging
from typing import Any

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..militares.repository import MilitarRepository
from ..secoes.repository import SecaoRepository
from .payload import snapshot_from_payload, snapshot_to_payload
from .repository import RosterRepository

logger = logging.getLogger(__name__)

_EDIT_ROLES = frozenset({Role.ADMIN, Role.EDITOR})


class RosterService:
    """Use case: read the whole roster and persist it back (full sync)."""

    def __init__(self, roster: RosterRepository, militares: MilitarRepository, secoes: SecaoRepository):
        self._roster = roster
        self._militares = militares
        self._secoes = secoes

    def load_data(self) -> dict:
        snapshot = self._roster.load()
        data = snapshot_to_payload(snapshot)
        data["secoes"] = [s.to_dict() for s in self._secoes.list_all()]
        data["militares"] = [m.to_public_dict() for m in self._militares.list_all()]
        return data

    def save_data(self, *, current_role: Role, payload: Any) -> None:
        if current_role not in _EDIT_ROLES:
            raise AuthorizationError("Permissão negada. Usuários não podem salvar dados.")

        snapshot = snapshot_from_payload(payload)
        self._roster.replace_all(snapshot)
        logger.info("Roster saved by role %s", current_role.value)

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Militar


class MilitarRepository(Protocol):
    """Interface do repositório de militares.

    Observação (DIP): os serviços dependem desta interface, não do banco concreto.
    """

    def get_by_id(self, militar_id: int) -> Optional[Militar]:
        raise NotImplementedError

    def get_by_num(self, num: str) -> Optional[Militar]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Militar]:
        """Look up by registration number reduced to digits."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Militar]:
        raise NotImplementedError

    def list_with_access(self) -> Sequence[Militar]:
        raise NotImplementedError

    def create(
        self,
        *,
        num: str,
        nome: str,
        secao: str,
        posto: str,
        carga_horaria: str,
        password_hash: Optional[str],
        role: Optional[Role],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        militar_id: int,
        num: str,
        nome: str,
        secao: str,
        posto: str,
        carga_horaria: str,
        role: Optional[Role],
        password_hash: Optional[str],
        keep_password: bool,
    ) -> bool:
        """Update a militar.

        With ``keep_password`` the stored hash is left untouched and
        ``password_hash`` is ignored.
        """

        raise NotImplementedError

    def set_password(self, militar_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_cascade(self, militar_id: int) -> bool:
        """Delete the militar together with its grid, overtime and overrides."""

        raise NotImplementedError

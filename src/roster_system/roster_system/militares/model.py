from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import digits_only
from ..core.enums import Role


@dataclass(frozen=True)
class Militar:
    """Entidade de domínio: militar da escala.

    Observação: objeto de dados puro (sem acesso ao banco).
    """

    id: int
    num: str
    nome: str
    secao: str
    posto: str
    carga_horaria: str
    password_hash: Optional[str] = None
    role: Optional[Role] = None

    @property
    def has_access(self) -> bool:
        return bool(self.password_hash) and self.role is not None

    @property
    def username(self) -> str:
        return digits_only(self.num)

    def to_public_dict(self) -> dict:
        role = self.role.value if self.role else None
        return {
            "id": self.id,
            "num": self.num,
            "nome": self.nome,
            "secao": self.secao,
            "posto": self.posto,
            "typeHora": self.carga_horaria,
            "role": role,
            "user_role": role,
        }

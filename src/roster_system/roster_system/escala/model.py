from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import MAX_DAY, MAX_MILITAR_ID
from ..core.exceptions import ValidationError
from ..legendas.model import Legenda


@dataclass(frozen=True, order=True)
class GridKey:
    """Address of one roster cell: militar, 0-based month, 1-based day."""

    militar_id: int
    mes: int
    dia: int

    @classmethod
    def parse(cls, raw: str) -> "GridKey":
        parts = str(raw).split("-")
        if len(parts) != 3:
            raise ValidationError(f"Chave de escala inválida: {raw!r}")
        try:
            militar_id, mes, dia = (int(p) for p in parts)
        except ValueError:
            raise ValidationError(f"Chave de escala inválida: {raw!r}")

        if not 0 < militar_id <= MAX_MILITAR_ID:
            raise ValidationError(f"Militar inválido na chave {raw!r}")
        if not 0 <= mes <= 11:
            raise ValidationError(f"Mês inválido na chave {raw!r}")
        if not 1 <= dia <= MAX_DAY:
            raise ValidationError(f"Dia inválido na chave {raw!r}")
        return cls(militar_id=militar_id, mes=mes, dia=dia)

    def __str__(self) -> str:
        return f"{self.militar_id}-{self.mes}-{self.dia}"


@dataclass(frozen=True)
class HoraExtra:
    """Signed overtime adjustment of one day plus a free-text note."""

    val: float = 0.0
    obs: str = ""

    @property
    def is_empty(self) -> bool:
        return self.val == 0 and not self.obs

    def to_dict(self) -> dict:
        return {"val": self.val, "obs": self.obs}


@dataclass(frozen=True)
class Aviso:
    id: str
    text: str
    author: str = ""
    author_username: Optional[str] = None
    date_display: str = ""
    created_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "author": self.author,
            "authorUsername": self.author_username,
            "dateDisplay": self.date_display,
            "createdAt": self.created_at,
        }


@dataclass
class RosterSnapshot:
    """Everything the full-table sync reads and rewrites."""

    escala: dict[GridKey, str] = field(default_factory=dict)
    horas_extras: dict[GridKey, HoraExtra] = field(default_factory=dict)
    cargas_diarias: dict[GridKey, str] = field(default_factory=dict)
    avisos: dict[str, list[Aviso]] = field(default_factory=dict)
    # None: legend table is left as is by the sync.
    legendas: Optional[list[Legenda]] = None

    def for_month(self, mes: int) -> "RosterSnapshot":
        return RosterSnapshot(
            escala={k: v for k, v in self.escala.items() if k.mes == mes},
            horas_extras={k: v for k, v in self.horas_extras.items() if k.mes == mes},
            cargas_diarias={k: v for k, v in self.cargas_diarias.items() if k.mes == mes},
            avisos=self.avisos,
            legendas=self.legendas,
        )

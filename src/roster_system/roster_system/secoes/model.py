from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Secao:
    sigla: str
    desc: str

    def to_dict(self) -> dict:
        return {"sigla": self.sigla, "desc": self.desc}

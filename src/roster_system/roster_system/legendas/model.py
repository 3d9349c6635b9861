from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Legenda:
    """Código de escala configurável (sigla, cores e horas fixas)."""

    sigla: str
    nome: str
    desc: str = ""
    color: str = "#e5e7eb"
    text: str = "#374151"
    horas: float = 0.0

    def to_dict(self) -> dict:
        return {
            "sigla": self.sigla,
            "nome": self.nome,
            "desc": self.desc,
            "color": self.color,
            "text": self.text,
            "horas": self.horas,
        }

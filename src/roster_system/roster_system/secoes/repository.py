from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Secao


class SecaoRepository(Protocol):
    def list_all(self) -> Sequence[Secao]:
        raise NotImplementedError

    def get(self, sigla: str) -> Optional[Secao]:
        raise NotImplementedError

    def upsert(self, secao: Secao) -> None:
        raise NotImplementedError

    def delete(self, sigla: str) -> bool:
        raise NotImplementedError

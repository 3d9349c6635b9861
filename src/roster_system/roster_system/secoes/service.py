from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Secao
from .repository import SecaoRepository

logger = logging.getLogger(__name__)


class SecaoService:
    def __init__(self, secoes: SecaoRepository):
        self._secoes = secoes

    def list_all(self) -> Sequence[Secao]:
        return self._secoes.list_all()

    def save(self, *, current_role: Role, sigla: str, desc: str) -> Secao:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Acesso negado. Apenas ADMIN pode gerenciar seções.")

        secao = Secao(
            sigla=require_non_empty(sigla, "Sigla").upper(),
            desc=require_non_empty(desc, "Descrição"),
        )
        self._secoes.upsert(secao)
        logger.info("Secao %s saved", secao.sigla)
        return secao

    def delete(self, *, current_role: Role, sigla: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Acesso negado. Apenas ADMIN pode gerenciar seções.")

        sigla = (sigla or "").strip().upper()
        if not self._secoes.delete(sigla):
            raise NotFoundError("Seção não encontrada")
        logger.info("Secao %s deleted", sigla)

from __future__ import annotations

import logging

from flask import Flask, request

from ..common.decorators import current_role, login_required, roles_required
from ..common.responses import domain_error, ok, server_error
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/secoes", methods=["GET"], endpoint="list_secoes")
    @login_required
    def list_secoes():
        secoes = container.secao_service.list_all()
        return ok(secoes=[s.to_dict() for s in secoes])

    @app.route("/api/secoes", methods=["POST"], endpoint="save_secao")
    @roles_required(Role.ADMIN)
    def save_secao():
        data = request.get_json(silent=True) or {}
        try:
            secao = container.secao_service.save(
                current_role=current_role(),
                sigla=data.get("sigla", ""),
                desc=data.get("desc", ""),
            )
            return ok(secao=secao.to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Failed to save secao")
            return server_error("Erro ao salvar seção", e)

    @app.route("/api/secoes/<sigla>", methods=["DELETE"], endpoint="delete_secao")
    @roles_required(Role.ADMIN)
    def delete_secao(sigla: str):
        try:
            container.secao_service.delete(current_role=current_role(), sigla=sigla)
            return ok()
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Failed to delete secao %s", sigla)
            return server_error("Erro ao excluir seção", e)

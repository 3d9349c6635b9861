from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.decorators import current_role, login_required, roles_required
from ..common.responses import domain_error, ok, server_error
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/data", methods=["GET"], endpoint="get_data")
    @login_required
    def get_data():
        try:
            return jsonify(container.roster_service.load_data())
        except Exception as e:
            logger.exception("Error fetching data")
            return server_error("Erro ao carregar dados", e)

    @app.route("/api/save", methods=["POST"], endpoint="save_data")
    @roles_required(Role.ADMIN, Role.EDITOR)
    def save_data():
        try:
            container.roster_service.save_data(
                current_role=current_role(),
                payload=request.get_json(silent=True),
            )
            return ok()
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Save error")
            return server_error("Erro ao salvar", e)

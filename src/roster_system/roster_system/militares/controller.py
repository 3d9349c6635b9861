from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.decorators import current_role, current_user, login_required, roles_required
from ..common.responses import domain_error, ok, server_error
from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .service import MilitarInput

logger = logging.getLogger(__name__)


def _militar_input(data: dict) -> MilitarInput:
    raw_id = data.get("id")
    return MilitarInput(
        id=int(raw_id) if raw_id not in (None, "", 0, "0") else None,
        num=str(data.get("num") or ""),
        nome=str(data.get("nome") or ""),
        secao=str(data.get("secao") or ""),
        posto=str(data.get("posto") or ""),
        type_hora=str(data.get("typeHora") or ""),
        has_access=data.get("hasAccess") is True,
        password=str(data.get("password") or ""),
        role=data.get("role") or None,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

            session.clear()
            session.permanent = bool(data.get("remember"))
            session["militar_id"] = s_user.militar_id

            return ok(user={"username": s_user.username, "name": s_user.name, "role": s_user.role.value})
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Login failed")
            return server_error("Erro no banco de dados", e)

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        session.clear()
        return ok()

    @app.route("/api/user/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = request.get_json(silent=True) or {}
        try:
            container.auth_service.change_password(
                username=current_user().username,
                old_password=data.get("oldPassword", ""),
                new_password=data.get("newPassword", ""),
            )
            return ok()
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Password change failed")
            return server_error("Erro ao atualizar senha", e)

    @app.route("/api/manage/militar", methods=["POST"], endpoint="save_militar")
    @roles_required(Role.ADMIN)
    def save_militar():
        data = request.get_json(silent=True) or {}
        try:
            militar_id = container.militar_service.save(current_role=current_role(), data=_militar_input(data))
            return ok(id=militar_id)
        except (TypeError, ValueError):
            return domain_error(ValidationError("Dados inválidos."))
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Militar management failed")
            return server_error("Erro ao salvar militar", e)

    @app.route("/api/manage/militar/<int:militar_id>", methods=["DELETE"], endpoint="delete_militar")
    @roles_required(Role.ADMIN)
    def delete_militar(militar_id: int):
        try:
            container.militar_service.delete(current_role=current_role(), militar_id=militar_id)
            return ok()
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            logger.exception("Delete of militar %s failed", militar_id)
            return server_error("Erro na exclusão", e)

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @roles_required(Role.ADMIN)
    def list_users():
        try:
            return ok(users=container.militar_service.list_users(current_role=current_role()))
        except DomainError as e:
            return domain_error(e)

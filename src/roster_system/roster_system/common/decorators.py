from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, session

from ..core.enums import Role

AUTH_EXTENSION = "roster_auth"


def _load_user():
    """Reload the session's militar; clears the session when access is gone."""

    militar_id = session.get("militar_id")
    if militar_id is None:
        return None

    user = current_app.extensions[AUTH_EXTENSION].session_user(militar_id)
    if user is None:
        session.clear()
        return None
    g.current_user = user
    return user


def _unauthenticated():
    return jsonify({"success": False, "error": "Faça login para continuar."}), 401


def current_user():
    return g.current_user


def current_role() -> Optional[Role]:
    user = g.get("current_user")
    return user.role if user else None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if _load_user() is None:
            return _unauthenticated()
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = set(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = _load_user()
            if user is None:
                return _unauthenticated()
            if user.role not in allowed:
                return jsonify({"success": False, "error": "Acesso negado."}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import digits_only, require_min_length, require_non_empty
from ..core.constants import DEFAULT_CARGA, MIN_PASSWORD_LENGTH
from ..core.enums import CargaHoraria, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import Militar
from .repository import MilitarRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    militar_id: int
    username: str
    name: str
    role: Role


@dataclass(frozen=True)
class MilitarInput:
    """Dados do formulário de cadastro/edição de militar."""

    num: str
    nome: str
    secao: str = ""
    posto: str = ""
    type_hora: str = DEFAULT_CARGA
    has_access: bool = False
    password: str = ""
    role: Optional[str] = None
    id: Optional[int] = None


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. legacy hashes written by another tool
        return False


class AuthService:
    """Use case: login and password change."""

    def __init__(self, militares: MilitarRepository):
        self._militares = militares

    def authenticate(self, username: str, password: str) -> SessionUser:
        militar = self._militares.get_by_username(digits_only(username))
        if not militar:
            raise AuthenticationError("Credenciais inválidas")
        if not militar.has_access:
            raise AuthenticationError("Usuário sem acesso ao sistema")
        if not _password_matches(militar.password_hash, password or ""):
            raise AuthenticationError("Credenciais inválidas")

        logger.info("Login ok for %s (%s)", militar.username, militar.role.value)
        return SessionUser(
            militar_id=militar.id,
            username=militar.username,
            name=militar.nome,
            role=militar.role,
        )

    def session_user(self, militar_id: int) -> Optional[SessionUser]:
        """Current identity of a logged-in militar; None once deleted or without access."""

        militar = self._militares.get_by_id(int(militar_id))
        if not militar or not militar.has_access:
            return None
        return SessionUser(
            militar_id=militar.id,
            username=militar.username,
            name=militar.nome,
            role=militar.role,
        )

    def change_password(self, *, username: str, old_password: str, new_password: str) -> None:
        username = digits_only(username)
        if not username or not old_password or not new_password:
            raise ValidationError("Dados incompletos.")
        require_min_length(new_password, "Nova senha", MIN_PASSWORD_LENGTH)

        militar = self._militares.get_by_username(username)
        if not militar or not militar.password_hash:
            raise AuthenticationError("Usuário não encontrado ou sem acesso.")
        if not _password_matches(militar.password_hash, old_password):
            raise AuthenticationError("Senha atual incorreta.")

        self._militares.set_password(militar.id, generate_password_hash(new_password))
        logger.info("Password changed for %s", username)


class MilitarService:
    """Use case: manage personnel and their system access (admin)."""

    def __init__(self, militares: MilitarRepository):
        self._militares = militares

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Acesso negado. Apenas ADMIN pode gerenciar militares.")

    @staticmethod
    def _resolve_carga(posto: str, type_hora: str) -> str:
        if "civil" in posto.lower():
            return CargaHoraria.OITO.value
        type_hora = (type_hora or DEFAULT_CARGA).strip()
        try:
            return CargaHoraria(type_hora).value
        except ValueError:
            raise ValidationError("Carga horária inválida (use 6h ou 8h)")

    @staticmethod
    def _resolve_role(data: MilitarInput) -> Optional[Role]:
        if not data.has_access:
            return None
        if not data.role:
            raise ValidationError("Perfil de acesso obrigatório.")
        try:
            return Role(str(data.role).upper())
        except ValueError:
            raise ValidationError("Perfil de acesso inválido.")

    def list_all(self) -> Sequence[Militar]:
        return self._militares.list_all()

    def list_users(self, *, current_role: Role) -> list[dict]:
        self._require_admin(current_role)
        return [
            {"id": m.id, "username": m.num, "role": m.role.value, "name": m.nome}
            for m in self._militares.list_with_access()
        ]

    def save(self, *, current_role: Role, data: MilitarInput) -> int:
        """Create (no id) or update a militar; returns its id."""

        self._require_admin(current_role)

        num = require_non_empty(data.num, "Matrícula")
        nome = require_non_empty(data.nome, "Nome")
        secao = (data.secao or "").strip()
        posto = (data.posto or "").strip()
        carga = self._resolve_carga(posto, data.type_hora)
        role = self._resolve_role(data)
        password = (data.password or "").strip()

        # Login uses the digits of num, so "150.111-2" and "1501112" collide.
        username = digits_only(num)
        same_num = [self._militares.get_by_num(num)]
        if username:
            same_num.append(self._militares.get_by_username(username))
        if any(m and m.id != data.id for m in same_num):
            raise ValidationError("Matrícula já cadastrada.")

        password_hash = None
        if role is not None and password:
            require_min_length(password, "Senha", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        if data.id:
            current = self._militares.get_by_id(int(data.id))
            if not current:
                raise NotFoundError("Militar não encontrado.")
            if role is not None and password_hash is None and not current.password_hash:
                raise ValidationError("Senha obrigatória para novo usuário com acesso.")

            found = self._militares.update(
                militar_id=int(data.id),
                num=num,
                nome=nome,
                secao=secao,
                posto=posto,
                carga_horaria=carga,
                role=role,
                password_hash=password_hash,
                keep_password=role is not None and password_hash is None,
            )
            if not found:
                raise NotFoundError("Militar não encontrado.")
            logger.info("Militar %s updated (access=%s)", num, role.value if role else None)
            return int(data.id)

        if role is not None and password_hash is None:
            raise ValidationError("Senha obrigatória para novo usuário com acesso.")

        new_id = self._militares.create(
            num=num,
            nome=nome,
            secao=secao,
            posto=posto,
            carga_horaria=carga,
            password_hash=password_hash,
            role=role,
        )
        logger.info("Militar %s created with id %s", num, new_id)
        return new_id

    def delete(self, *, current_role: Role, militar_id: int) -> None:
        self._require_admin(current_role)
        if not self._militares.delete_cascade(int(militar_id)):
            raise NotFoundError("Militar não encontrado.")
        logger.info("Militar %s deleted", militar_id)

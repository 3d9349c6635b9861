from __future__ import annotations

import copy
from dataclasses import replace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.roster_system.roster_system.common.validators import digits_only
from src.roster_system.roster_system.container import build_services
from src.roster_system.roster_system.core.enums import Role
from src.roster_system.roster_system.escala.model import RosterSnapshot
from src.roster_system.roster_system.legendas.model import Legenda
from src.roster_system.roster_system.militares.model import Militar
from src.roster_system.roster_system.secoes.model import Secao


class InMemoryMilitares:
    def __init__(self, militares=()):
        self.by_id: dict[int, Militar] = {m.id: m for m in militares}
        self._next_id = max(self.by_id, default=0) + 1

    def get_by_id(self, militar_id: int) -> Optional[Militar]:
        return self.by_id.get(int(militar_id))

    def get_by_num(self, num: str) -> Optional[Militar]:
        return next((m for m in self.by_id.values() if m.num == num), None)

    def get_by_username(self, username: str) -> Optional[Militar]:
        return next((m for m in self.by_id.values() if digits_only(m.num) == username), None)

    def list_all(self):
        return list(self.by_id.values())

    def list_with_access(self):
        return [m for m in self.by_id.values() if m.has_access]

    def create(self, *, num, nome, secao, posto, carga_horaria, password_hash, role) -> int:
        new_id = self._next_id
        self._next_id += 1
        self.by_id[new_id] = Militar(
            id=new_id,
            num=num,
            nome=nome,
            secao=secao,
            posto=posto,
            carga_horaria=carga_horaria,
            password_hash=password_hash,
            role=role,
        )
        return new_id

    def update(self, *, militar_id, num, nome, secao, posto, carga_horaria, role, password_hash, keep_password) -> bool:
        current = self.by_id.get(int(militar_id))
        if not current:
            return False
        self.by_id[current.id] = replace(
            current,
            num=num,
            nome=nome,
            secao=secao,
            posto=posto,
            carga_horaria=carga_horaria,
            role=role,
            password_hash=current.password_hash if keep_password else password_hash,
        )
        return True

    def set_password(self, militar_id: int, password_hash: str) -> bool:
        current = self.by_id.get(int(militar_id))
        if not current:
            return False
        self.by_id[current.id] = replace(current, password_hash=password_hash)
        return True

    def delete_cascade(self, militar_id: int) -> bool:
        return self.by_id.pop(int(militar_id), None) is not None


class InMemorySecoes:
    def __init__(self, secoes=()):
        self.by_sigla: dict[str, Secao] = {s.sigla: s for s in secoes}

    def list_all(self):
        return sorted(self.by_sigla.values(), key=lambda s: s.sigla)

    def get(self, sigla: str):
        return self.by_sigla.get(sigla)

    def upsert(self, secao: Secao) -> None:
        self.by_sigla[secao.sigla] = secao

    def delete(self, sigla: str) -> bool:
        return self.by_sigla.pop(sigla, None) is not None


class InMemoryLegendas:
    def __init__(self, legendas=()):
        self.legendas = list(legendas)

    def list_all(self):
        return list(self.legendas)


class InMemoryRoster:
    def __init__(self, snapshot: Optional[RosterSnapshot] = None, legendas: Optional[InMemoryLegendas] = None):
        self.snapshot = snapshot or RosterSnapshot()
        self.legendas = legendas
        self.replace_calls = 0

    def load(self) -> RosterSnapshot:
        snap = copy.deepcopy(self.snapshot)
        if self.legendas is not None:
            snap.legendas = self.legendas.list_all()
        return snap

    def load_month(self, mes: int) -> RosterSnapshot:
        month = self.snapshot.for_month(mes)
        month.legendas = None
        return month

    def replace_all(self, snapshot: RosterSnapshot) -> None:
        self.replace_calls += 1
        self.snapshot = copy.deepcopy(snapshot)
        if snapshot.legendas is not None and self.legendas is not None:
            self.legendas.legendas = list(snapshot.legendas)


DEFAULT_LEGENDAS = [
    Legenda(sigla="P", nome="Presencial", horas=8.0),
    Legenda(sigla="PM", nome="Presencial Manhã", horas=8.0),
    Legenda(sigla="PT", nome="Presencial Tarde", horas=8.0),
    Legenda(sigla="FO", nome="Folga", horas=0.0),
    Legenda(sigla="C", nome="Curso", horas=8.0),
    Legenda(sigla="PSO", nome="Serviço Operacional", horas=24.0),
]


def make_militar(
    militar_id: int,
    *,
    num: str = "",
    nome: str = "",
    secao: str = "S-1",
    posto: str = "Sd",
    carga: str = "6h",
    password: Optional[str] = None,
    role: Optional[Role] = None,
) -> Militar:
    return Militar(
        id=militar_id,
        num=num or f"100.{militar_id:03d}-0",
        nome=nome or f"Militar {militar_id}",
        secao=secao,
        posto=posto,
        carga_horaria=carga,
        password_hash=generate_password_hash(password) if password else None,
        role=role,
    )


@pytest.fixture
def militares_repo():
    return InMemoryMilitares(
        [
            make_militar(1, num="142.924-0", nome="Administrador", posto="Cap", password="1429240", role=Role.ADMIN),
            make_militar(2, num="150.111-2", nome="Editor Silva", posto="2º Sgt", password="senha123", role=Role.EDITOR),
            make_militar(3, num="160.222-3", nome="Usuario Souza", posto="Cb", password="senha123", role=Role.USUARIO),
            make_militar(4, num="170.333-4", nome="Sem Acesso", secao="S-3", posto="Sd", carga="8h"),
        ]
    )


@pytest.fixture
def secoes_repo():
    return InMemorySecoes([Secao("S-1", "Recursos Humanos"), Secao("S-3", "Operações")])


@pytest.fixture
def legendas_repo():
    return InMemoryLegendas(DEFAULT_LEGENDAS)


@pytest.fixture
def roster_repo(legendas_repo):
    return InMemoryRoster(legendas=legendas_repo)


@pytest.fixture
def container(militares_repo, secoes_repo, legendas_repo, roster_repo):
    return build_services(
        militares=militares_repo,
        secoes=secoes_repo,
        legendas=legendas_repo,
        roster=roster_repo,
        year=2026,
    )


@pytest.fixture
def militar_factory():
    return make_militar

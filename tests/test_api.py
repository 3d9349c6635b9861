import io

import openpyxl
import pytest

from src.roster_system.roster_system.core.enums import Role
from src.roster_system.roster_system.escala.model import GridKey
from src.roster_system.roster_system.main import create_app
from src.roster_system.roster_system.militares.service import MilitarInput


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture
def admin(client):
    assert login(client, "142.924-0", "1429240").status_code == 200
    return client


@pytest.fixture
def editor(client):
    assert login(client, "1501112", "senha123").status_code == 200
    return client


@pytest.fixture
def usuario(client):
    assert login(client, "1602223", "senha123").status_code == 200
    return client


def test_login_returns_user(client):
    resp = login(client, "142.924-0", "1429240")
    assert resp.get_json() == {
        "success": True,
        "user": {"username": "1429240", "name": "Administrador", "role": "ADMIN"},
    }


def test_login_failure(client):
    resp = login(client, "1429240", "errada")
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "Credenciais inválidas"}


@pytest.mark.parametrize(
    "method, path",
    [("get", "/api/data"), ("post", "/api/save"), ("get", "/api/horas/0"), ("get", "/api/users")],
)
def test_anonymous_requests_rejected(client, method, path):
    resp = getattr(client, method)(path)
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_logout_ends_session(admin):
    assert admin.post("/api/logout").get_json() == {"success": True}
    assert admin.get("/api/data").status_code == 401


def test_get_data(usuario, roster_repo):
    roster_repo.snapshot.escala[GridKey(1, 0, 5)] = "P"

    data = usuario.get("/api/data").get_json()

    assert data["escala"] == {"1-0-5": "P"}
    assert {"escala", "horasExtras", "cargasDiarias", "avisos", "legendas", "secoes", "militares"} <= set(data)


def test_editor_saves_roster(editor, roster_repo):
    resp = editor.post("/api/save", json={"escala": {"3-1-2": "P"}, "cargasDiarias": {"3-1-2": "8h"}})

    assert resp.get_json() == {"success": True}
    assert roster_repo.snapshot.escala == {GridKey(3, 1, 2): "P"}
    assert roster_repo.snapshot.cargas_diarias == {GridKey(3, 1, 2): "8h"}


def test_plain_user_cannot_save(usuario, roster_repo):
    resp = usuario.post("/api/save", json={"escala": {}})
    assert resp.status_code == 403
    assert roster_repo.replace_calls == 0


def test_save_rejects_invalid_payload(admin, roster_repo):
    resp = admin.post("/api/save", json={"escala": {"x": "P"}})
    assert resp.status_code == 400
    assert roster_repo.replace_calls == 0

    resp = admin.post("/api/save", data="não é json", content_type="text/plain")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Nenhum dado enviado."


def test_change_password(usuario):
    resp = usuario.post("/api/user/password", json={"oldPassword": "senha123", "newPassword": "outra-senha"})
    assert resp.get_json() == {"success": True}

    resp = usuario.post("/api/user/password", json={"oldPassword": "senha123", "newPassword": "mais-uma"})
    assert resp.status_code == 401


def test_admin_manages_militares(admin, militares_repo):
    resp = admin.post(
        "/api/manage/militar",
        json={"num": "200.000-1", "nome": "Recruta", "secao": "S-3", "posto": "Sd", "typeHora": "8h"},
    )
    body = resp.get_json()
    assert body["success"] is True
    new_id = body["id"]
    assert militares_repo.get_by_id(new_id).carga_horaria == "8h"

    resp = admin.post("/api/manage/militar", json={"num": "200.000-1", "nome": "Duplicado"})
    assert resp.status_code == 400

    resp = admin.post("/api/manage/militar", json={"id": "abc", "num": "1", "nome": "X"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Dados inválidos."

    assert admin.delete(f"/api/manage/militar/{new_id}").get_json() == {"success": True}
    assert admin.delete(f"/api/manage/militar/{new_id}").status_code == 404


def test_editor_cannot_manage_militares(editor):
    assert editor.post("/api/manage/militar", json={"num": "1", "nome": "X"}).status_code == 403
    assert editor.delete("/api/manage/militar/4").status_code == 403
    assert editor.get("/api/users").status_code == 403


def test_list_users(admin):
    users = admin.get("/api/users").get_json()["users"]
    assert [u["id"] for u in users] == [1, 2, 3]


def test_secoes_endpoints(admin, secoes_repo):
    assert [s["sigla"] for s in admin.get("/api/secoes").get_json()["secoes"]] == ["S-1", "S-3"]

    resp = admin.post("/api/secoes", json={"sigla": "s-4", "desc": "Logística"})
    assert resp.get_json()["secao"] == {"sigla": "S-4", "desc": "Logística"}

    assert admin.delete("/api/secoes/S-4").get_json() == {"success": True}
    assert admin.delete("/api/secoes/S-4").status_code == 404


def test_monthly_hours(usuario, roster_repo):
    for dia in range(1, 29):
        roster_repo.snapshot.escala[GridKey(4, 1, dia)] = "P"

    body = usuario.get("/api/horas/1?secao=S-3").get_json()

    assert body["success"] is True
    assert body["dias"] == 28
    assert [r["militar"]["id"] for r in body["militares"]] == [4]
    assert body["militares"][0]["total"] == 210.0

    assert usuario.get("/api/horas/12").status_code == 400


def test_monthly_hours_export(usuario):
    resp = usuario.get("/api/horas/0/export")
    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "horas_01_2026.xlsx" in resp.headers["Content-Disposition"]


def test_deleted_editor_loses_access(editor, container, roster_repo):
    container.militar_service.delete(current_role=Role.ADMIN, militar_id=2)

    resp = editor.post("/api/save", json={"escala": {}})

    assert resp.status_code == 401
    assert roster_repo.replace_calls == 0
    assert editor.get("/api/data").status_code == 401


def test_revoked_access_ends_session(usuario, container):
    container.militar_service.save(
        current_role=Role.ADMIN,
        data=MilitarInput(id=3, num="160.222-3", nome="Usuario Souza", has_access=False),
    )

    assert usuario.get("/api/data").status_code == 401


def test_role_is_read_from_the_stored_record(editor, container, roster_repo):
    container.militar_service.save(
        current_role=Role.ADMIN,
        data=MilitarInput(id=2, num="150.111-2", nome="Editor Silva", has_access=True, role="USUARIO"),
    )

    assert editor.post("/api/save", json={"escala": {}}).status_code == 403
    assert editor.get("/api/data").status_code == 200
    assert roster_repo.replace_calls == 0


@pytest.mark.parametrize("has_access", ["false", "0", 1, None])
def test_has_access_must_be_a_json_boolean(admin, militares_repo, has_access):
    resp = admin.post(
        "/api/manage/militar",
        json={"num": "210.000-1", "nome": "Sem Login", "hasAccess": has_access, "role": "ADMIN", "password": "abcd"},
    )

    created = militares_repo.get_by_id(resp.get_json()["id"])
    assert created.has_access is False
    assert created.role is None


def test_delete_secao_accepts_lowercase_sigla(admin, secoes_repo):
    assert admin.delete("/api/secoes/s-3").get_json() == {"success": True}
    assert secoes_repo.get("S-3") is None


def test_monthly_hours_export_honors_filters(usuario):
    resp = usuario.get("/api/horas/1/export?secao=S-3")

    ws = openpyxl.load_workbook(io.BytesIO(resp.data))["02-2026"]
    assert [row[2] for row in ws.iter_rows(min_row=2, values_only=True)] == ["Sem Acesso"]

    resp = usuario.get("/api/horas/1/export?q=silva")
    ws = openpyxl.load_workbook(io.BytesIO(resp.data))["02-2026"]
    assert [row[2] for row in ws.iter_rows(min_row=2, values_only=True)] == ["Editor Silva"]

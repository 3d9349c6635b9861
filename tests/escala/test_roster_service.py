import pytest

from src.roster_system.roster_system.core.enums import Role
from src.roster_system.roster_system.core.exceptions import AuthorizationError, ValidationError
from src.roster_system.roster_system.escala.model import GridKey


def test_load_data_includes_sections_and_personnel(container, roster_repo):
    roster_repo.snapshot.escala[GridKey(1, 0, 5)] = "P"

    data = container.roster_service.load_data()

    assert data["escala"] == {"1-0-5": "P"}
    assert [s["sigla"] for s in data["secoes"]] == ["S-1", "S-3"]
    assert {m["id"] for m in data["militares"]} == {1, 2, 3, 4}
    assert "password_hash" not in data["militares"][0]
    assert {l["sigla"] for l in data["legendas"]} >= {"P", "PM", "PT"}


@pytest.mark.parametrize("role", [Role.ADMIN, Role.EDITOR])
def test_editors_replace_the_whole_roster(container, roster_repo, role):
    roster_repo.snapshot.escala[GridKey(3, 0, 1)] = "FO"

    container.roster_service.save_data(
        current_role=role,
        payload={"escala": {"1-0-5": "P"}, "horasExtras": {"1-0-5": {"val": 1, "obs": ""}}},
    )

    assert roster_repo.replace_calls == 1
    assert roster_repo.snapshot.escala == {GridKey(1, 0, 5): "P"}
    assert roster_repo.snapshot.horas_extras[GridKey(1, 0, 5)].val == 1.0


def test_plain_user_cannot_save(container, roster_repo):
    with pytest.raises(AuthorizationError):
        container.roster_service.save_data(current_role=Role.USUARIO, payload={"escala": {}})
    assert roster_repo.replace_calls == 0


def test_invalid_payload_does_not_touch_storage(container, roster_repo):
    roster_repo.snapshot.escala[GridKey(3, 0, 1)] = "FO"

    with pytest.raises(ValidationError):
        container.roster_service.save_data(current_role=Role.ADMIN, payload={"escala": {"bad-key": "P"}})
    with pytest.raises(ValidationError):
        container.roster_service.save_data(current_role=Role.ADMIN, payload=None)

    assert roster_repo.replace_calls == 0
    assert roster_repo.snapshot.escala == {GridKey(3, 0, 1): "FO"}


def test_saved_legendas_change_hour_computation(container, legendas_repo):
    container.roster_service.save_data(
        current_role=Role.ADMIN,
        payload={
            "escala": {"1-0-5": "C"},
            "legendas": [{"sigla": "C", "nome": "Curso", "horas": 4}],
        },
    )

    assert [l.sigla for l in legendas_repo.list_all()] == ["C"]
    report = container.hours_service.build_month(0)
    row = next(r for r in report.rows if r.militar.id == 1)
    assert row.horas == 4.0


def test_save_without_legendas_keeps_them(container, legendas_repo):
    before = legendas_repo.list_all()
    container.roster_service.save_data(current_role=Role.EDITOR, payload={"escala": {}})
    assert legendas_repo.list_all() == before

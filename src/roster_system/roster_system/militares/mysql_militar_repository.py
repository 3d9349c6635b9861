from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Militar
from .repository import MilitarRepository

_COLUMNS = "id, num, nome, secao, posto, carga_horaria, password_hash, role"


def _row_to_militar(r: dict) -> Militar:
    return Militar(
        id=int(r["id"]),
        num=r["num"],
        nome=r["nome"],
        secao=r.get("secao") or "",
        posto=r.get("posto") or "",
        carga_horaria=r.get("carga_horaria") or "6h",
        password_hash=r.get("password_hash"),
        role=Role(r["role"]) if r.get("role") else None,
    )


class MySQLMilitarRepository(MilitarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch_one(self, where: str, params: tuple) -> Optional[Militar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM militares WHERE {where}", params)
            row = fetchone(cur)
            return _row_to_militar(row) if row else None

    def get_by_id(self, militar_id: int) -> Optional[Militar]:
        return self._fetch_one("id=%s", (int(militar_id),))

    def get_by_num(self, num: str) -> Optional[Militar]:
        return self._fetch_one("num=%s", (num,))

    def get_by_username(self, username: str) -> Optional[Militar]:
        return self._fetch_one(
            "REPLACE(REPLACE(REPLACE(num, '.', ''), '-', ''), ' ', '')=%s",
            (username,),
        )

    def list_all(self) -> Sequence[Militar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM militares ORDER BY secao, nome")
            return [_row_to_militar(r) for r in fetchall(cur)]

    def list_with_access(self) -> Sequence[Militar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM militares
                WHERE password_hash IS NOT NULL AND role IS NOT NULL
                ORDER BY nome
                """
            )
            return [_row_to_militar(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        num: str,
        nome: str,
        secao: str,
        posto: str,
        carga_horaria: str,
        password_hash: Optional[str],
        role: Optional[Role],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO militares(num, nome, secao, posto, carga_horaria, password_hash, role)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (num, nome, secao, posto, carga_horaria, password_hash, role.value if role else None),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        militar_id: int,
        num: str,
        nome: str,
        secao: str,
        posto: str,
        carga_horaria: str,
        role: Optional[Role],
        password_hash: Optional[str],
        keep_password: bool,
    ) -> bool:
        role_value = role.value if role else None
        with db_cursor(self._conn_factory) as (_, cur):
            if keep_password:
                cur.execute(
                    """
                    UPDATE militares
                    SET num=%s, nome=%s, secao=%s, posto=%s, carga_horaria=%s, role=%s
                    WHERE id=%s
                    """,
                    (num, nome, secao, posto, carga_horaria, role_value, int(militar_id)),
                )
            else:
                cur.execute(
                    """
                    UPDATE militares
                    SET num=%s, nome=%s, secao=%s, posto=%s, carga_horaria=%s, password_hash=%s, role=%s
                    WHERE id=%s
                    """,
                    (num, nome, secao, posto, carga_horaria, password_hash, role_value, int(militar_id)),
                )
            # MySQL reports 0 affected rows when nothing changed, so check existence instead.
            cur.execute("SELECT id FROM militares WHERE id=%s", (int(militar_id),))
            return fetchone(cur) is not None

    def set_password(self, militar_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE militares SET password_hash=%s WHERE id=%s", (password_hash, int(militar_id)))
            return cur.rowcount > 0

    def delete_cascade(self, militar_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM militares WHERE id=%s", (int(militar_id),))
            deleted = cur.rowcount > 0
            for table in ("escala", "horas_extras", "cargas_diarias"):
                cur.execute(f"DELETE FROM {table} WHERE militar_id=%s", (int(militar_id),))
            return deleted

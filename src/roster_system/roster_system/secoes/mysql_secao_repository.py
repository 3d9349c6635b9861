from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Secao
from .repository import SecaoRepository


class MySQLSecaoRepository(SecaoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Secao]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT sigla, descricao FROM secoes ORDER BY sigla")
            return [Secao(sigla=r["sigla"], desc=r["descricao"] or "") for r in fetchall(cur)]

    def get(self, sigla: str) -> Optional[Secao]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT sigla, descricao FROM secoes WHERE sigla=%s", (sigla,))
            r = fetchone(cur)
            if not r:
                return None
            return Secao(sigla=r["sigla"], desc=r["descricao"] or "")

    def upsert(self, secao: Secao) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO secoes(sigla, descricao) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE descricao=VALUES(descricao)
                """,
                (secao.sigla, secao.desc),
            )

    def delete(self, sigla: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM secoes WHERE sigla=%s", (sigla,))
            return cur.rowcount > 0

from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall
from .model import Legenda
from .repository import LegendaRepository


def row_to_legenda(r: dict) -> Legenda:
    return Legenda(
        sigla=r["sigla"],
        nome=r["nome"] or r["sigla"],
        desc=r.get("descricao") or "",
        color=r["color"],
        text=r["text_color"],
        horas=as_float(r["horas"]),
    )


class MySQLLegendaRepository(LegendaRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Legenda]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT sigla, nome, descricao, color, text_color, horas FROM legendas ORDER BY sigla")
            return [row_to_legenda(r) for r in fetchall(cur)]

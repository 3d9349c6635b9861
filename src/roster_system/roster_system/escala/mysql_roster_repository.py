from __future__ import annotations

import logging
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall
from ..legendas.mysql_legenda_repository import row_to_legenda
from .model import Aviso, GridKey, HoraExtra, RosterSnapshot
from .repository import RosterRepository

logger = logging.getLogger(__name__)


def _key(r: dict) -> GridKey:
    return GridKey(militar_id=int(r["militar_id"]), mes=int(r["mes"]), dia=int(r["dia"]))


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _read_grid(self, cur, snapshot: RosterSnapshot, mes: Optional[int]) -> None:
        where, params = ("WHERE mes=%s", (int(mes),)) if mes is not None else ("", ())

        cur.execute(f"SELECT militar_id, mes, dia, sigla FROM escala {where}", params)
        snapshot.escala = {_key(r): r["sigla"] for r in fetchall(cur)}

        cur.execute(f"SELECT militar_id, mes, dia, val, obs FROM horas_extras {where}", params)
        snapshot.horas_extras = {
            _key(r): HoraExtra(val=as_float(r["val"]), obs=r.get("obs") or "") for r in fetchall(cur)
        }

        cur.execute(f"SELECT militar_id, mes, dia, carga FROM cargas_diarias {where}", params)
        snapshot.cargas_diarias = {_key(r): r["carga"] for r in fetchall(cur)}

    def load(self) -> RosterSnapshot:
        snapshot = RosterSnapshot()
        with db_cursor(self._conn_factory) as (_, cur):
            self._read_grid(cur, snapshot, None)

            cur.execute(
                """
                SELECT id, ref_key, texto, author, author_username, date_display, created_at
                FROM avisos
                ORDER BY ref_key, created_at
                """
            )
            for r in fetchall(cur):
                snapshot.avisos.setdefault(r["ref_key"], []).append(
                    Aviso(
                        id=r["id"],
                        text=r["texto"],
                        author=r.get("author") or "",
                        author_username=r.get("author_username"),
                        date_display=r.get("date_display") or "",
                        created_at=r.get("created_at") or "",
                    )
                )

            cur.execute("SELECT sigla, nome, descricao, color, text_color, horas FROM legendas ORDER BY sigla")
            snapshot.legendas = [row_to_legenda(r) for r in fetchall(cur)]
        return snapshot

    def load_month(self, mes: int) -> RosterSnapshot:
        snapshot = RosterSnapshot()
        with db_cursor(self._conn_factory) as (_, cur):
            self._read_grid(cur, snapshot, mes)
        return snapshot

    def replace_all(self, snapshot: RosterSnapshot) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM escala")
            if snapshot.escala:
                cur.executemany(
                    "INSERT INTO escala(militar_id, mes, dia, sigla) VALUES(%s,%s,%s,%s)",
                    [(k.militar_id, k.mes, k.dia, sigla) for k, sigla in snapshot.escala.items()],
                )

            cur.execute("DELETE FROM horas_extras")
            if snapshot.horas_extras:
                cur.executemany(
                    "INSERT INTO horas_extras(militar_id, mes, dia, val, obs) VALUES(%s,%s,%s,%s,%s)",
                    [(k.militar_id, k.mes, k.dia, he.val, he.obs) for k, he in snapshot.horas_extras.items()],
                )

            cur.execute("DELETE FROM cargas_diarias")
            if snapshot.cargas_diarias:
                cur.executemany(
                    "INSERT INTO cargas_diarias(militar_id, mes, dia, carga) VALUES(%s,%s,%s,%s)",
                    [(k.militar_id, k.mes, k.dia, carga) for k, carga in snapshot.cargas_diarias.items()],
                )

            cur.execute("DELETE FROM avisos")
            rows = [
                (a.id, ref_key, a.text, a.author, a.author_username, a.date_display, a.created_at)
                for ref_key, items in snapshot.avisos.items()
                for a in items
            ]
            if rows:
                cur.executemany(
                    """
                    INSERT INTO avisos(id, ref_key, texto, author, author_username, date_display, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    rows,
                )

            if snapshot.legendas is not None:
                cur.execute("DELETE FROM legendas")
                if snapshot.legendas:
                    cur.executemany(
                        """
                        INSERT INTO legendas(sigla, nome, descricao, color, text_color, horas)
                        VALUES(%s,%s,%s,%s,%s,%s)
                        """,
                        [(l.sigla, l.nome, l.desc, l.color, l.text, l.horas) for l in snapshot.legendas],
                    )

        logger.info(
            "Roster synced: escala=%d horas_extras=%d cargas=%d avisos=%d",
            len(snapshot.escala),
            len(snapshot.horas_extras),
            len(snapshot.cargas_diarias),
            len(rows),
        )

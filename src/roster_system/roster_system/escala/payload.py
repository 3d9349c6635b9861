"""Conversion between the JSON document exchanged with the front end and
:class:`RosterSnapshot`.

Wire shape::

    {
      "escala":        {"<id>-<mes>-<dia>": "P", ...},
      "horasExtras":   {"<id>-<mes>-<dia>": {"val": 1.5, "obs": "..."}, ...},
      "cargasDiarias": {"<id>-<mes>-<dia>": "8h", ...},
      "avisos":        {"<ref_key>": [{"id": ..., "text": ..., ...}], ...},
      "legendas":      [{"sigla": "P", "nome": ..., "horas": 8.0, ...}, ...]
    }

Values are checked against the column sizes of ``database/schema.sql`` so a
bad document fails as a ValidationError before the sync starts.
"""
from __future__ import annotations

import math
import uuid
from typing import Any, Optional

from ..core.enums import CargaHoraria
from ..core.exceptions import ValidationError
from ..legendas.model import Legenda
from .model import Aviso, GridKey, HoraExtra, RosterSnapshot

MAX_SIGLA = 16
MAX_REF_KEY = 64
MAX_AVISO_ID = 64
MAX_OBS = 255
MAX_AUTHOR = 160
MAX_AUTHOR_USERNAME = 32
MAX_DATE_DISPLAY = 32
MAX_CREATED_AT = 40
MAX_TEXTO_BYTES = 65535
MAX_LEGENDA_NOME = 120
MAX_LEGENDA_DESC = 255
MAX_COLOR = 16
# DECIMAL(6,2) and DECIMAL(5,2)
MAX_ABS_HORA_EXTRA = 9999.99
MAX_ABS_LEGENDA_HORAS = 999.99


def _as_mapping(value: Any, name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError(f"Campo {name} deve ser um objeto")
    return value


def _to_float(value: Any, what: str, max_abs: float) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ValidationError(f"Valor numérico inválido em {what}: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Valor numérico inválido em {what}: {value!r}")
    if not math.isfinite(number):
        raise ValidationError(f"Valor numérico inválido em {what}: {value!r}")
    if abs(number) > max_abs:
        raise ValidationError(f"Valor fora do limite em {what} (máximo {max_abs})")
    return number


def _text(value: Any, what: str, max_len: int, *, strip: bool = False) -> str:
    text = str(value or "")
    if strip:
        text = text.strip()
    if len(text) > max_len:
        raise ValidationError(f"{what} excede {max_len} caracteres")
    return text


def _parse_escala(raw: Any) -> dict[GridKey, str]:
    out: dict[GridKey, str] = {}
    for key, sigla in _as_mapping(raw, "escala").items():
        sigla = _text(sigla, f"Sigla em {key}", MAX_SIGLA, strip=True)
        if sigla:
            out[GridKey.parse(key)] = sigla
    return out


def _parse_horas_extras(raw: Any) -> dict[GridKey, HoraExtra]:
    out: dict[GridKey, HoraExtra] = {}
    for key, entry in _as_mapping(raw, "horasExtras").items():
        if isinstance(entry, dict):
            he = HoraExtra(
                val=_to_float(entry.get("val"), key, MAX_ABS_HORA_EXTRA),
                obs=_text(entry.get("obs"), f"Observação em {key}", MAX_OBS, strip=True),
            )
        else:
            he = HoraExtra(val=_to_float(entry, key, MAX_ABS_HORA_EXTRA))
        if not he.is_empty:
            out[GridKey.parse(key)] = he
    return out


def _parse_cargas(raw: Any) -> dict[GridKey, str]:
    out: dict[GridKey, str] = {}
    for key, carga in _as_mapping(raw, "cargasDiarias").items():
        if not carga:
            continue
        try:
            out[GridKey.parse(key)] = CargaHoraria(str(carga).strip()).value
        except ValueError:
            raise ValidationError(f"Carga horária inválida em {key}: {carga!r}")
    return out


def _parse_avisos(raw: Any) -> dict[str, list[Aviso]]:
    out: dict[str, list[Aviso]] = {}
    seen: set[str] = set()
    for ref_key, items in _as_mapping(raw, "avisos").items():
        if not isinstance(items, list):
            continue
        ref_key = _text(ref_key, "Chave de aviso", MAX_REF_KEY)
        avisos: list[Aviso] = []
        for av in items:
            if not isinstance(av, dict):
                raise ValidationError(f"Aviso inválido em {ref_key}")
            aviso_id = _text(av.get("id") or uuid.uuid4().hex, "Id de aviso", MAX_AVISO_ID)
            if aviso_id in seen:
                raise ValidationError(f"Aviso duplicado: {aviso_id}")
            seen.add(aviso_id)

            text = str(av.get("text") or "")
            if len(text.encode("utf-8")) > MAX_TEXTO_BYTES:
                raise ValidationError(f"Texto do aviso {aviso_id} muito longo")
            avisos.append(
                Aviso(
                    id=aviso_id,
                    text=text,
                    author=_text(av.get("author"), "Autor", MAX_AUTHOR),
                    author_username=_text(av.get("authorUsername"), "Usuário do autor", MAX_AUTHOR_USERNAME) or None,
                    date_display=_text(av.get("dateDisplay"), "Data do aviso", MAX_DATE_DISPLAY),
                    created_at=_text(av.get("createdAt"), "Criação do aviso", MAX_CREATED_AT),
                )
            )
        if avisos:
            out[ref_key] = avisos
    return out


def parse_legendas(raw: Any) -> Optional[list[Legenda]]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValidationError("Campo legendas deve ser uma lista")

    out: list[Legenda] = []
    seen: set[str] = set()
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Legenda inválida")
        sigla = _text(item.get("sigla"), "Sigla da legenda", MAX_SIGLA, strip=True)
        if not sigla:
            raise ValidationError("Legenda sem sigla")
        if sigla in seen:
            raise ValidationError(f"Legenda duplicada: {sigla}")
        seen.add(sigla)

        desc = _text(item.get("desc"), f"Descrição da legenda {sigla}", MAX_LEGENDA_DESC)
        out.append(
            Legenda(
                sigla=sigla,
                nome=_text(item.get("nome") or desc or sigla, f"Nome da legenda {sigla}", MAX_LEGENDA_NOME),
                desc=desc,
                color=_text(item.get("color") or "#e5e7eb", f"Cor da legenda {sigla}", MAX_COLOR),
                text=_text(item.get("text") or "#374151", f"Cor do texto da legenda {sigla}", MAX_COLOR),
                horas=_to_float(item.get("horas"), f"legenda {sigla}", MAX_ABS_LEGENDA_HORAS),
            )
        )
    return out


def snapshot_from_payload(payload: Any) -> RosterSnapshot:
    """Validate and normalise a save request; raises ValidationError."""

    if not isinstance(payload, dict):
        raise ValidationError("Nenhum dado enviado.")
    data = payload
    return RosterSnapshot(
        escala=_parse_escala(data.get("escala")),
        horas_extras=_parse_horas_extras(data.get("horasExtras")),
        cargas_diarias=_parse_cargas(data.get("cargasDiarias")),
        avisos=_parse_avisos(data.get("avisos")),
        legendas=parse_legendas(data.get("legendas")),
    )


def snapshot_to_payload(snapshot: RosterSnapshot) -> dict:
    return {
        "escala": {str(k): v for k, v in sorted(snapshot.escala.items())},
        "horasExtras": {str(k): v.to_dict() for k, v in sorted(snapshot.horas_extras.items())},
        "cargasDiarias": {str(k): v for k, v in sorted(snapshot.cargas_diarias.items())},
        "avisos": {ref: [a.to_dict() for a in items] for ref, items in snapshot.avisos.items()},
        "legendas": [l.to_dict() for l in snapshot.legendas or []],
    }

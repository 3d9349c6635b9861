from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Perfil de acesso usado nas checagens de permissão."""

    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    USUARIO = "USUARIO"


class CargaHoraria(str, Enum):
    """Perfil de carga horária (seleciona a regra de horas do dia)."""

    SEIS = "6h"
    OITO = "8h"

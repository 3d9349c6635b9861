from __future__ import annotations

import re

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} obrigatório")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} deve ter no mínimo {min_len} caracteres")
    return value


def digits_only(value: str) -> str:
    """Keep only the digits of a registration number ("142.924-0" -> "1429240")."""
    return re.sub(r"\D", "", value or "")

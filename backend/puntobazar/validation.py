from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable


class ValidationError(ValueError):
    """400-level input problem."""


class NotFoundError(LookupError):
    """404-level unknown id."""


# ---------------------------------------------------------------------------
# Coercion rules shared by every endpoint. Request bodies are loosely typed
# (forms send strings, JSON sends numbers), so each inbound field goes
# through exactly one of these.
# ---------------------------------------------------------------------------

def to_number(value: Any) -> int | float:
    """Numeric coercion: anything non-numeric becomes 0."""
    if value is None or isinstance(value, bool):
        return int(bool(value))
    if isinstance(value, (int, float)):
        num = value
    else:
        s = str(value).strip()
        if not s:
            return 0
        try:
            num = float(s)
        except ValueError:
            return 0
    if isinstance(num, float):
        if math.isnan(num) or math.isinf(num):
            return 0
        if num.is_integer():
            return int(num)
    return num


def to_int(value: Any) -> int:
    return int(to_number(value))


def optional_int(value: Any) -> int | None:
    """Like to_int, but a missing or blank value stays None so callers can pick a default."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_int(value)


def to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def to_flag(value: Any) -> bool:
    return bool(value)


def optional_bool(value: Any) -> bool | None:
    """Explicit booleans are honoured; anything else means "toggle"."""
    if isinstance(value, bool):
        return value
    return None


# Largest id a signed 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1


def optional_id(value: Any) -> int | None:
    """Positive id that fits the id column, or None."""
    num = to_int(value)
    return num if 0 < num <= MAX_ID else None


def normalize_list(value: Any) -> list[str]:
    """
    Accept a list or a comma separated string ("rojo, azul") and return a
    trimmed list without blanks or repeats, keeping the first-seen order.
    """
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        raw = [str(v) for v in value if v is not None]
    else:
        raw = str(value).split(",")
    out: list[str] = []
    for item in raw:
        s = item.strip()
        if s and s not in out:
            out.append(s)
    return out


INVALID_BODY_MESSAGE = "Cuerpo JSON inválido."


def require_object(payload: Any) -> dict:
    """Request bodies must be JSON objects; a missing body counts as {}."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError(INVALID_BODY_MESSAGE)
    return payload


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - fields: writable field -> coercion function (unknown keys are ignored)
    - required_on_create: fields that must be present and truthy for POST
    - required_any_on_create: at least one of these must be truthy for POST
    - required_message: the 400 message shown when a requirement fails
    """
    fields: dict[str, Callable[[Any], Any]]
    required_on_create: frozenset[str] = field(default_factory=frozenset)
    required_any_on_create: frozenset[str] = field(default_factory=frozenset)
    required_message: str = "Faltan campos obligatorios."


def validate_payload(*, payload: Any, policy: ModelValidationPolicy, partial: bool) -> dict:
    """
    Validates + normalizes incoming JSON.
    Returns a cleaned patch dict holding only the writable keys that were
    actually sent.

    partial=False: create semantics (enforce required fields)
    partial=True: patch semantics (coerce only provided keys)
    """
    payload = require_object(payload)

    patch: dict = {}
    for key, coerce in policy.fields.items():
        if key in payload:
            patch[key] = coerce(payload[key])

    if not partial:
        def _given(f: str) -> bool:
            # whitespace-only text counts as missing
            return bool(payload.get(f)) and patch.get(f) != ""

        if not all(_given(f) for f in policy.required_on_create):
            raise ValidationError(policy.required_message)
        if policy.required_any_on_create and not any(
            _given(f) for f in policy.required_any_on_create
        ):
            raise ValidationError(policy.required_message)

    return patch


RESELLER_POLICY = ModelValidationPolicy(
    fields={
        "nombre": to_text,
        "telefono": to_text,
        "zona": to_text,
        "acepta_whatsapp": to_flag,
    },
    required_on_create=frozenset({"nombre"}),
    required_message="Nombre es obligatorio.",
)

CAMPAIGN_POLICY = ModelValidationPolicy(
    fields={
        "titulo": to_text,
        "texto": to_text,
        "activa": to_flag,
    },
    required_any_on_create=frozenset({"titulo", "texto"}),
    required_message="Se necesita al menos título o texto.",
)

PRODUCT_POLICY = ModelValidationPolicy(
    fields={
        "nombre": to_text,
        "descripcion": to_text,
        "precio": to_number,
        "categoria": to_text,
        "imagen_url": to_text,
        "colores": normalize_list,
        "tamanos": normalize_list,
        "stock": optional_int,
        "oferta_tipo": to_text,
        "oferta_valor": to_number,
        "oferta_etiqueta": to_text,
    },
    required_on_create=frozenset({"nombre", "precio"}),
    required_message="Nombre y precio son obligatorios.",
)

CUSTOMER_POLICY = ModelValidationPolicy(
    fields={
        "nombre": to_text,
        "telefono": to_text,
        "zona": to_text,
        "notas": to_text,
    },
    required_on_create=frozenset({"nombre"}),
    required_message="Nombre es obligatorio.",
)

import json
import logging
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from .config import (
    DEFAULT_METHOD,
    DEFAULT_PATH,
    FIELD_BASE_URL,
    FIELD_BODY,
    FIELD_HEADERS,
    FIELD_METHOD,
    FIELD_PATH,
    FIELD_QUERY,
    HTTP_METHODS,
    JSON_INDENT,
)
from .errors import MissingFieldError, ValidationError
from .models import FormState, ParsedFields, Profile

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def parse_json(raw: str) -> Any:
    """Parse strict JSON; ``NaN``, ``Infinity`` and overflowing numbers are rejected."""
    return json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)


def dump_pretty(value: Any) -> str:
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False)


def dump_compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def parse_json_field(raw: str, label: str) -> Any:
    raw = raw.strip()
    if not raw:
        return {}
    try:
        return parse_json(raw)
    except ValueError as exc:
        raise ValidationError(label, str(exc)) from exc


def parse_json_object(raw: str, label: str) -> dict[str, Any]:
    parsed = parse_json_field(raw, label)
    if not isinstance(parsed, dict):
        raise ValidationError(label, "Expected a JSON object.", f'Field "{label}" must be a JSON object.')
    return parsed


def format_number(value: float) -> str:
    """Shortest round-trip text for a float, laid out as JSON.stringify does.

    Plain decimals from 1e-6 up to 1e21, exponent notation such as ``1e-7`` outside.
    """
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    sign = "-" if value < 0 else ""
    digits_tuple = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digits_tuple.digits)).rstrip("0")
    point = len(digits_tuple.digits) + digits_tuple.exponent
    if 0 < point <= 21:
        return f"{sign}{digits[:point]}.{digits[point:]}"
    if -6 < point <= 0:
        zeros = "0" * -point
        return f"{sign}0.{zeros}{digits}"
    exponent = point - 1
    mantissa = digits if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{exponent:+d}"


def stringify_scalar(value: Any) -> str:
    """Coerce a JSON value to text the way JSON prints it."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value):
        return format_number(value)
    return dump_compact(value)


def normalize_headers(headers: Mapping[str, Any]) -> dict[str, str]:
    return {str(key): stringify_scalar(value) for key, value in headers.items() if value is not None}


def has_content(body: Any) -> bool:
    """Whether a parsed body carries anything worth sending."""
    if isinstance(body, (dict, list, str)):
        return len(body) > 0
    return False


def to_form_state(profile: Profile) -> FormState:
    return FormState(
        method=profile.method or DEFAULT_METHOD,
        base_url=profile.base_url or "",
        path=profile.path or DEFAULT_PATH,
        headers_text=dump_pretty(profile.headers if profile.headers is not None else {}),
        query_text=dump_pretty(profile.query if profile.query is not None else {}),
        body_text=dump_pretty(profile.body if profile.body is not None else {}),
    )


def on_profile_selected(profile: Profile) -> FormState:
    """Form state to show after the operator switches to ``profile``."""
    return to_form_state(profile)


def validate(form: FormState) -> ParsedFields:
    """Parse and check every text field before anything touches the network.

    JSON fields are parsed in order (headers, query, body); the first failure
    wins. Blank Base URL / Endpoint are reported only once all three JSON
    fields parsed cleanly.
    """
    try:
        headers = parse_json_object(form.headers_text, FIELD_HEADERS)
        query = parse_json_object(form.query_text, FIELD_QUERY)
        body = parse_json_field(form.body_text, FIELD_BODY)
    except ValidationError as exc:
        logger.debug("Validation failed for %s: %s", exc.field, exc.detail)
        raise

    if not form.base_url.strip():
        raise MissingFieldError(FIELD_BASE_URL)
    if not form.path.strip():
        raise MissingFieldError(FIELD_PATH)

    method = (form.method or DEFAULT_METHOD).strip().upper()
    if method not in HTTP_METHODS:
        raise ValidationError(FIELD_METHOD, form.method, f"Unsupported HTTP method: {form.method!r}")
    return ParsedFields(method=method, headers=headers, query=query, body=body)

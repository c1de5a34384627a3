from __future__ import annotations

import json
import logging
import re
import unicodedata
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from .config import DEFAULT_METHOD, DEFAULT_PATH, HTTP_METHODS
from .errors import CatalogError
from .models import Profile
from .parsing import stringify_scalar

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool)

PRESET_PROFILES: tuple[Profile, ...] = (
    Profile(
        id="payments",
        label="Payments · Gateway A",
        complexity="Low",
        description="Direct checkout with a plain Bearer token and idempotency support.",
        method="POST",
        base_url="https://sandbox.gatewaya.com",
        path="/v1/payments",
        headers={
            "Authorization": "Bearer {{TOKEN_GATEWAY_A}}",
            "Content-Type": "application/json",
            "X-Idempotency-Key": "ORDER-123",
        },
        query={"expand": "customer"},
        body={
            "amount": 1000,
            "currency": "BRL",
            "payment_method": "card",
            "capture": True,
            "metadata": {"orderId": "ORDER-123"},
        },
        checklist=(
            "Generate a Bearer token in the dashboard and send it in Authorization.",
            "Send X-Idempotency-Key to prevent duplicate charges.",
            "Errors return `errors[].message` and `errors[].code` fields.",
        ),
    ),
    Profile(
        id="loans",
        label="Credit · API B",
        complexity="Medium",
        description="Simulations need a dedicated API key and explicit versioning in the path.",
        method="GET",
        base_url="https://api.banco-b.com",
        path="/v2/loans/simulations",
        headers={"x-api-key": "{{API_KEY_B}}", "Accept": "application/json"},
        query={"customerId": "12345678900", "includeOffers": True},
        body={},
        checklist=(
            "Regenerate the key in the portal and send it in x-api-key.",
            "Versioning lives in the path (e.g. /v2).",
            "Use includeOffers=true to get the full payload and compare SLAs.",
        ),
    ),
    Profile(
        id="kyc",
        label="Onboarding · API C",
        complexity="High",
        description="OAuth2 flow with webhooks and base64 attachments for identity checks.",
        method="POST",
        base_url="https://kyc.partners.com",
        path="/v3/identity/checks",
        headers={
            "Authorization": "Bearer {{ACCESS_TOKEN_OAUTH2}}",
            "Content-Type": "application/json",
            "X-Webhook-Token": "{{WEBHOOK_SECRET}}",
        },
        query={"async": True},
        body={
            "applicant": {
                "document": {"type": "CPF", "number": "12345678900"},
                "attachments": ["{{BASE64_FILE}}"],
            },
            "webhookUrl": "https://example.com/webhooks/kyc",
        },
        checklist=(
            "Replace Authorization with the token issued by OAuth2 Client Credentials.",
            "Send attachments converted to base64 in the attachments[] key.",
            "Point webhookUrl at your public environment.",
        ),
    ),
)


def _require_str(data: Mapping[str, Any], key: str, default: str | None = None) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise CatalogError(f"Profile field {key!r} must be a string.")
    return value


def _scalar_mapping(data: Mapping[str, Any], key: str, *, allow_null: bool) -> dict[str, Any]:
    raw = data.get(key)
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise CatalogError(f"Profile field {key!r} must be an object.")
    result: dict[str, Any] = {}
    for name, value in raw.items():
        if value is None and allow_null:
            result[str(name)] = None
        elif isinstance(value, _SCALARS):
            result[str(name)] = value
        else:
            raise CatalogError(f"Profile field {key!r} has a non-scalar value for {name!r}.")
    return result


def profile_from_mapping(data: Mapping[str, Any]) -> Profile:
    """Build a ``Profile`` from a loosely-typed catalog record."""
    if not isinstance(data, Mapping):
        raise CatalogError("Profile record must be an object.")

    profile_id = _require_str(data, "id")
    if not profile_id.strip():
        raise CatalogError("Profile id must not be empty.")

    method = _require_str(data, "method", DEFAULT_METHOD).strip().upper() or DEFAULT_METHOD
    if method not in HTTP_METHODS:
        raise CatalogError(f"Profile {profile_id!r} uses unsupported method {method!r}.")

    # Header values are sent as text, so they are stored as text.
    raw_headers = _scalar_mapping(data, "headers", allow_null=False)
    headers = {name: stringify_scalar(value) for name, value in raw_headers.items()}

    body = data.get("body", {})
    try:
        json.dumps(body, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Profile {profile_id!r} body is not JSON-serializable: {exc}") from exc

    checklist = data.get("checklist") or []
    if not isinstance(checklist, Sequence) or isinstance(checklist, str) or not all(
        isinstance(item, str) for item in checklist
    ):
        raise CatalogError(f"Profile {profile_id!r} checklist must be a list of strings.")

    return Profile(
        id=profile_id,
        label=_require_str(data, "label", profile_id),
        complexity=_require_str(data, "complexity", ""),
        description=_require_str(data, "description", ""),
        method=method,
        base_url=_require_str(data, "baseUrl", data.get("base_url", "")),
        path=_require_str(data, "path", DEFAULT_PATH) or DEFAULT_PATH,
        headers=headers,
        query=_scalar_mapping(data, "query", allow_null=True),
        body={} if body is None else body,
        checklist=tuple(checklist),
    )


def catalog_from_records(records: Iterable[Mapping[str, Any]]) -> tuple[Profile, ...]:
    profiles = tuple(profile_from_mapping(record) for record in records)
    if not profiles:
        raise CatalogError("Catalog is empty.")
    seen: set[str] = set()
    for profile in profiles:
        if profile.id in seen:
            raise CatalogError(f"Duplicate profile id {profile.id!r}.")
        seen.add(profile.id)
    return profiles


def load_catalog(path: Path) -> tuple[Profile, ...]:
    """Load profiles from a JSON file holding an array of profile records."""
    try:
        data = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CatalogError(f"Could not read catalog {path}: {exc}") from exc
    if not isinstance(data, list):
        raise CatalogError("Catalog file must contain a JSON array of profiles.")
    profiles = catalog_from_records(data)
    logger.debug("Loaded %d profile(s) from %s", len(profiles), path)
    return profiles


def find_profile(profiles: Sequence[Profile], profile_id: str) -> Profile:
    for profile in profiles:
        if profile.id == profile_id:
            return profile
    logger.warning("Unknown profile id %r; falling back to %r", profile_id, profiles[0].id)
    return profiles[0]


def complexity_class(label: str) -> str:
    """Slug for a complexity label: ``"Média"`` -> ``"media"``."""
    decomposed = unicodedata.normalize("NFD", label)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", "-", stripped, flags=re.IGNORECASE).lower()

"""Benchmark Lab: build, fire and inspect single API requests from the terminal."""

from .app import BenchmarkLab
from .catalog import PRESET_PROFILES, load_catalog, profile_from_mapping
from .errors import BusyError, CatalogError, MissingFieldError, TransportError, UrlError, ValidationError
from .models import FormState, ParsedRequest, Profile, RunResult
from .parsing import on_profile_selected, to_form_state, validate
from .session import Session, new_session, reset, run, select_profile, update_field
from .urls import build_url, prepare_request

__all__ = [
    "BenchmarkLab",
    "PRESET_PROFILES",
    "load_catalog",
    "profile_from_mapping",
    "BusyError",
    "CatalogError",
    "MissingFieldError",
    "TransportError",
    "UrlError",
    "ValidationError",
    "FormState",
    "ParsedRequest",
    "Profile",
    "RunResult",
    "on_profile_selected",
    "to_form_state",
    "validate",
    "Session",
    "new_session",
    "reset",
    "run",
    "select_profile",
    "update_field",
    "build_url",
    "prepare_request",
]

__version__ = "0.1.0"

"""Session context and the run state machine.

A ``Session`` is owned by the calling layer (the TUI or a test) and is passed
to every engine call. It holds the only mutable state: the selected profile,
the live form, the last form error and the last ``RunResult``.

Run lifecycle::

    IDLE -> VALIDATING -> IDLE (form error, no result)
                       -> COMPOSING -> IDLE (URL error, no result)
                                    -> DISPATCHING -> NORMALIZING -> IDLE
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, fields, replace

from .catalog import PRESET_PROFILES, find_profile
from .dispatch import Dispatcher
from .errors import BusyError, UrlError, ValidationError
from .http_client import Sender
from .models import FormState, Profile, RunResult
from .parsing import on_profile_selected, validate
from .results import normalize, snapshot_of
from .urls import compose_request

logger = logging.getLogger(__name__)

FORM_FIELDS = frozenset(f.name for f in fields(FormState))


class RunPhase(enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    COMPOSING = "composing"
    DISPATCHING = "dispatching"
    NORMALIZING = "normalizing"


@dataclass
class Session:
    profiles: tuple[Profile, ...]
    selected: Profile
    form: FormState
    dispatcher: Dispatcher = field(default_factory=Dispatcher)
    result: RunResult | None = None
    error: str | None = None
    phase: RunPhase = RunPhase.IDLE

    @property
    def busy(self) -> bool:
        return self.dispatcher.in_flight or self.phase is not RunPhase.IDLE


def new_session(
    profiles: Sequence[Profile] = PRESET_PROFILES,
    *,
    sender: Sender | None = None,
    verify_tls: bool = True,
) -> Session:
    profiles = tuple(profiles)
    if not profiles:
        raise ValueError("At least one profile is required.")
    selected = profiles[0]
    return Session(
        profiles=profiles,
        selected=selected,
        form=on_profile_selected(selected),
        dispatcher=Dispatcher(sender, verify_tls=verify_tls),
    )


def select_profile(session: Session, profile_id: str) -> FormState:
    """Switch profile; the form is replaced wholesale and the form error cleared."""
    session.selected = find_profile(session.profiles, profile_id)
    session.form = on_profile_selected(session.selected)
    session.error = None
    return session.form


def reset(session: Session) -> FormState:
    """Discard edits and reload the selected profile. An in-flight run is untouched."""
    session.form = on_profile_selected(session.selected)
    session.error = None
    return session.form


def update_field(session: Session, name: str, value: str) -> FormState:
    if name not in FORM_FIELDS:
        raise KeyError(f"Unknown form field: {name}")
    session.form = replace(session.form, **{name: value})
    return session.form


async def run(session: Session) -> RunResult | None:
    """Validate, compose, dispatch and normalize one request.

    Returns the new ``RunResult``, or None when the form was rejected (the
    message is left in ``session.error`` and the previous result is kept).
    Raises ``BusyError`` if a run is already in flight.
    """
    if session.busy:
        raise BusyError("A request is already in flight.")

    session.error = None
    form = session.form
    try:
        session.phase = RunPhase.VALIDATING
        parsed = validate(form)
        session.phase = RunPhase.COMPOSING
        request = compose_request(form, parsed)
        session.phase = RunPhase.DISPATCHING
        raw = await session.dispatcher.dispatch(request)
        session.phase = RunPhase.NORMALIZING
        session.result = normalize(raw, request.url, snapshot_of(request))
    except (ValidationError, UrlError) as exc:
        session.error = str(exc)
        logger.debug("Run rejected during %s: %s", session.phase.value, exc)
        return None
    finally:
        session.phase = RunPhase.IDLE

    logger.debug("Run finished in %d ms", session.result.duration_ms)
    return session.result

"""User action handling."""

from .payload import FieldRule, SubmitPayloadBuilder, as_int, as_text, default_submit_fields
from .dispatcher import ActionDispatcher, ActionKind, DispatchOutcome, OutcomeStatus

__all__ = [
    "ActionDispatcher",
    "ActionKind",
    "DispatchOutcome",
    "OutcomeStatus",
    "FieldRule",
    "SubmitPayloadBuilder",
    "as_int",
    "as_text",
    "default_submit_fields",
]

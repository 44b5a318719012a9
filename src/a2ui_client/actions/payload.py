"""Submit payload construction from form overlay state."""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from a2ui_client.core import get_settings
from a2ui_client.protocol.models import ClientEvent, EventEnvelope
from a2ui_client.state import SurfaceStateStore

Coercer = Callable[[Any, Any], Any]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def as_text(value: Any, default: Any = "") -> Any:
    """Falsy values (None, "", 0, False) become the default."""
    return value if value else default


def as_int(value: Any, default: Any = 0) -> Any:
    """
    Parse the leading integer of a value.

    "4" -> 4, " 7 guests" -> 7, 4.9 -> 4. Missing, non-numeric and zero
    values become the default.
    """
    parsed: int | None = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float) and math.isfinite(value):
        parsed = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            parsed = int(match.group(1))
    return parsed if parsed else default


@dataclass(frozen=True)
class FieldRule:
    """Maps one binding path onto one event data field."""

    name: str
    path: str
    coerce: Coercer = as_text
    default: Any = ""

    def extract(self, overlay: Mapping[str, Any]) -> Any:
        return self.coerce(overlay.get(self.path), self.default)


def default_submit_fields(form_prefix: str = "/form/") -> tuple[FieldRule, ...]:
    """The reservation form fields every submit event carries."""
    return (
        FieldRule("name", f"{form_prefix}name"),
        FieldRule("date", f"{form_prefix}date"),
        FieldRule("time", f"{form_prefix}time"),
        FieldRule("party", f"{form_prefix}party", as_int, 2),
    )


class SubmitPayloadBuilder:
    """
    Builds the outbound submit event from the store's form overlay.

    Declared rules come first, in order. With ``include_extra`` any other
    overlay entry under the form prefix follows, keyed by its path suffix.
    """

    def __init__(
        self,
        rules: Sequence[FieldRule] | None = None,
        form_prefix: str | None = None,
        include_extra: bool | None = None,
    ) -> None:
        settings = get_settings()
        self.form_prefix = form_prefix or settings.form_prefix
        self.rules = tuple(rules) if rules is not None else default_submit_fields(self.form_prefix)
        self.include_extra = settings.submit_extra_fields if include_extra is None else include_extra

    def build_data(self, store: SurfaceStateStore) -> dict[str, Any]:
        overlay = store.overlay
        data = {rule.name: rule.extract(overlay) for rule in self.rules}

        if self.include_extra:
            claimed = {rule.path for rule in self.rules}
            for path, value in store.form_entries().items():
                key = path[len(self.form_prefix):]
                if path in claimed or not key or key in data:
                    continue
                data[key] = value

        return data

    def build(self, store: SurfaceStateStore, component_id: str) -> EventEnvelope:
        surface = store.surface
        return EventEnvelope(
            event=ClientEvent(
                surface_id=surface.surface_id if surface else "",
                component_id=component_id,
                type="action",
                data=self.build_data(store),
            )
        )

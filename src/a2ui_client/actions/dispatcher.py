"""Action Dispatcher - user actions to protocol round trips."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from a2ui_client.actions.payload import SubmitPayloadBuilder
from a2ui_client.clients import Transport
from a2ui_client.core import A2UIError, LogContext, get_logger, get_settings
from a2ui_client.monitoring import metrics_collector
from a2ui_client.protocol import ActionDescriptor, EventEnvelope, MessageDecoder
from a2ui_client.state import SurfaceStateStore

logger = get_logger(__name__)


class ActionKind(str, Enum):
    """Action types the dispatcher acts on. Anything else is ignored."""

    SUBMIT = "submit"
    NAVIGATE = "navigate"


class OutcomeStatus(str, Enum):
    APPLIED = "applied"  # response decoded and folded into the store
    IGNORED = "ignored"  # unrecognized action or missing data
    STALE = "stale"  # a newer request superseded this one


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of one dispatch."""

    status: OutcomeStatus
    action: str
    generation: int | None = None
    messages: int = 0
    event: EventEnvelope | None = None


class ActionDispatcher:
    """
    Turns action descriptors into network round trips.

    submit   -> POST the form event, apply the response on top of current state
    navigate -> GET a new surface, reset the registry and data model, apply

    Every round trip gets a generation token. Only the response for the latest
    token is applied; older ones are discarded. ``loading`` is true while the
    latest round trip is in flight.
    """

    def __init__(
        self,
        store: SurfaceStateStore,
        transport: Transport,
        decoder: MessageDecoder | None = None,
        base_url: str | None = None,
        payload_builder: SubmitPayloadBuilder | None = None,
        clear_overlay_on_navigate: bool | None = None,
        submit_component_id: str | None = None,
    ) -> None:
        settings = get_settings()
        self.store = store
        self.transport = transport
        self.decoder = decoder or MessageDecoder()
        self.base_url = (base_url if base_url is not None else settings.base_url).rstrip("/")
        self.payload_builder = payload_builder or SubmitPayloadBuilder()
        self.clear_overlay_on_navigate = (
            settings.clear_overlay_on_navigate
            if clear_overlay_on_navigate is None
            else clear_overlay_on_navigate
        )
        self.submit_component_id = submit_component_id or settings.submit_component_id

        self._generation = 0
        self._loading = False

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def generation(self) -> int:
        """Token of the most recently started round trip."""
        return self._generation

    async def dispatch(
        self, action: ActionDescriptor | dict[str, Any], component_id: str | None = None
    ) -> DispatchOutcome:
        """
        Dispatch a user-triggered action.

        Args:
            action: Action descriptor from a Button
            component_id: Id of the triggering component (submit events only)

        Returns:
            Outcome of the dispatch

        Raises:
            TransportError: If the round trip fails
            DecodeError: If the response is not valid NDJSON

        Failures of a round trip that a newer one has superseded are not
        raised; they come back as a STALE outcome.
        """
        if isinstance(action, dict):
            action = ActionDescriptor.model_validate(action)

        if action.type == ActionKind.SUBMIT.value:
            endpoint = action.data.get("endpoint")
            if endpoint and isinstance(endpoint, str):
                return await self._submit(endpoint, component_id or self.submit_component_id)
        elif action.type == ActionKind.NAVIGATE.value:
            url = action.data.get("url")
            if url and isinstance(url, str):
                return await self._fetch_surface(url, ActionKind.NAVIGATE.value)

        logger.info("dispatch_ignored", type=action.type, data_keys=sorted(action.data))
        metrics_collector.record_dispatch(self._label(action.type), OutcomeStatus.IGNORED.value)
        return DispatchOutcome(OutcomeStatus.IGNORED, action.type)

    async def load(self, url: str) -> DispatchOutcome:
        """Load a surface from scratch (initial fetch)."""
        return await self._fetch_surface(url, "load")

    async def _submit(self, endpoint: str, component_id: str) -> DispatchOutcome:
        envelope = self.payload_builder.build(self.store, component_id)
        url = self._absolute(endpoint)
        body = envelope.to_wire()
        logger.info("submit", url=url, component_id=component_id, fields=sorted(envelope.event.data))
        return await self._round_trip(
            lambda: self.transport.post(url, body),
            action=ActionKind.SUBMIT.value,
            replace=False,
            event=envelope,
        )

    async def _fetch_surface(self, url: str, action: str) -> DispatchOutcome:
        url = self._absolute(url)
        logger.info("fetch_surface", url=url, action=action)
        return await self._round_trip(lambda: self.transport.get(url), action=action, replace=True)

    async def _round_trip(
        self,
        fetch: Callable[[], Awaitable[str]],
        action: str,
        replace: bool,
        event: EventEnvelope | None = None,
    ) -> DispatchOutcome:
        self._generation += 1
        token = self._generation
        self._loading = True

        with LogContext(generation=token, action=action):
            try:
                payload = await fetch()
                messages = self.decoder.decode(payload)

                if token != self._generation:
                    return self._stale(action, token, len(messages), event)

                if replace:
                    self.store.reset(clear_overlay=self.clear_overlay_on_navigate)
                self.store.apply(messages)

                metrics_collector.record_dispatch(action, OutcomeStatus.APPLIED.value)
                logger.info("dispatch_applied", messages=len(messages), replace=replace)
                return DispatchOutcome(OutcomeStatus.APPLIED, action, token, len(messages), event)
            except A2UIError as e:
                if token != self._generation:
                    # A newer round trip owns the surface now
                    return self._stale(action, token, 0, event, error=e)
                metrics_collector.record_dispatch(action, "error")
                logger.error("dispatch_failed", error=str(e), error_type=type(e).__name__)
                raise
            finally:
                if token == self._generation:
                    self._loading = False

    def _stale(
        self,
        action: str,
        token: int,
        messages: int,
        event: EventEnvelope | None,
        error: A2UIError | None = None,
    ) -> DispatchOutcome:
        logger.info(
            "stale_response_discarded",
            latest=self._generation,
            error=str(error) if error else None,
        )
        metrics_collector.record_stale_response()
        metrics_collector.record_dispatch(action, OutcomeStatus.STALE.value)
        return DispatchOutcome(OutcomeStatus.STALE, action, token, messages, event)

    def _absolute(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return self.base_url + url

    @staticmethod
    def _label(action_type: str) -> str:
        known = {kind.value for kind in ActionKind}
        return action_type if action_type in known else "other"

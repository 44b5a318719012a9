"""
Surface Session
Wires store, resolvers, dispatcher and transport behind the renderer callbacks.
"""

from typing import Any

from a2ui_client.actions import ActionDispatcher, DispatchOutcome
from a2ui_client.clients import HttpTransport, Transport
from a2ui_client.core import Settings, get_logger
from a2ui_client.core.container import create_container
from a2ui_client.protocol import ActionDescriptor
from a2ui_client.render import ComponentTreeResolver, DataBindingResolver, StructuralNode
from a2ui_client.state import SurfaceStateStore

logger = get_logger(__name__)


class SurfaceSession:
    """
    One client-side surface.

    A rendering layer reads ``render()`` and wires its widgets to
    ``on_input_changed`` and ``on_action_triggered``. It never mutates the
    store directly.
    """

    def __init__(self, transport: Transport | None = None, settings: Settings | None = None) -> None:
        self.container = create_container(settings, transport)
        self.settings = self.container.get(Settings)

        self.store = self.container.get(SurfaceStateStore)
        self.bindings = self.container.get(DataBindingResolver)
        self.tree = self.container.get(ComponentTreeResolver)

        self._owns_transport = transport is None
        self.transport = self.container.get(Transport)
        self.dispatcher = self.container.get(ActionDispatcher)

    @property
    def loading(self) -> bool:
        return self.dispatcher.loading

    async def load(self, url: str | None = None) -> DispatchOutcome:
        """Fetch the initial surface (defaults to the configured stream path)."""
        return await self.dispatcher.load(url or self.settings.stream_path)

    def render(self, component_id: str | None = None) -> StructuralNode | None:
        """Structural tree from the surface root (or a given component)."""
        return self.tree.render(component_id)

    def on_input_changed(self, path: str | None, value: Any) -> None:
        """User edited a bound input."""
        if not path:
            logger.debug("input_without_binding")
            return
        self.store.set_overlay(path, value)

    async def on_action_triggered(
        self, action: ActionDescriptor | dict[str, Any], component_id: str | None = None
    ) -> DispatchOutcome:
        """User activated a component carrying an action."""
        return await self.dispatcher.dispatch(action, component_id)

    async def close(self) -> None:
        if self._owns_transport and isinstance(self.transport, HttpTransport):
            await self.transport.close()

    async def __aenter__(self) -> "SurfaceSession":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

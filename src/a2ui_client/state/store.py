"""Surface State Store - folds protocol messages into client state."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from a2ui_client.core import get_logger, get_settings
from a2ui_client.protocol.models import Component, Message

logger = get_logger(__name__)


@dataclass(frozen=True)
class Surface:
    """Identity of the surface being rendered."""

    surface_id: str
    root_id: str


class SurfaceStateStore:
    """
    Owns the surface identity, component registry, data model and form overlay.

    State only changes through ``apply``, ``set_overlay`` and ``reset``.
    Everything else reads through the accessors, which return read-only views.
    """

    def __init__(self, form_prefix: str | None = None) -> None:
        self.form_prefix = form_prefix or get_settings().form_prefix
        self._surface: Surface | None = None
        self._registry: dict[str, Component] = {}
        self._data_model: dict[str, Any] = {}
        self._overlay: dict[str, Any] = {}

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def surface(self) -> Surface | None:
        return self._surface

    @property
    def components(self) -> Mapping[str, Component]:
        return MappingProxyType(self._registry)

    @property
    def data_model(self) -> Mapping[str, Any]:
        return MappingProxyType(self._data_model)

    @property
    def overlay(self) -> Mapping[str, Any]:
        return MappingProxyType(self._overlay)

    def get_component(self, component_id: str) -> Component | None:
        """Look up a component by id. Returns None when it is not registered."""
        return self._registry.get(component_id)

    def form_entries(self) -> dict[str, Any]:
        """Overlay entries under the form namespace, in insertion order."""
        return {
            path: value for path, value in self._overlay.items() if path.startswith(self.form_prefix)
        }

    # ========================================================================
    # Mutations
    # ========================================================================

    def apply(self, messages: Iterable[Message]) -> None:
        """
        Fold a decoded batch into the store, in arrival order.

        Applying extends prior state. Call ``reset`` first for a full replace.
        """
        count = 0
        for message in messages:
            count += 1
            if message.begin_rendering is not None:
                begin = message.begin_rendering
                self._surface = Surface(surface_id=begin.surface_id, root_id=begin.root)

            if message.surface_update is not None:
                for component in message.surface_update.components:
                    self._registry[component.id] = component

            if message.data_model_update is not None:
                self._data_model.update(message.data_model_update.contents)

            if message.delete_surface is not None:
                self._delete_surface(message.delete_surface.surface_id)

        seeded = self._seed_overlay()

        logger.debug(
            "batch_applied",
            messages=count,
            components=len(self._registry),
            data_keys=len(self._data_model),
            seeded=seeded,
        )

    def set_overlay(self, path: str, value: Any) -> None:
        """Record a local edit. Overlay values win over the data model."""
        self._overlay[path] = value

    def reset(self, clear_overlay: bool = False) -> None:
        """Drop the registry and data model (and optionally the overlay)."""
        self._registry.clear()
        self._data_model.clear()
        if clear_overlay:
            self._overlay.clear()
        logger.debug("store_reset", clear_overlay=clear_overlay)

    def _delete_surface(self, surface_id: str) -> None:
        if self._surface is None or self._surface.surface_id != surface_id:
            logger.debug("delete_surface_ignored", surface_id=surface_id)
            return
        self._surface = None
        self.reset()
        logger.info("surface_deleted", surface_id=surface_id)

    def _seed_overlay(self) -> int:
        # Additive only: never overwrite a value the user already edited
        seeded = 0
        for path, value in self._data_model.items():
            if path.startswith(self.form_prefix) and path not in self._overlay:
                self._overlay[path] = value
                seeded += 1
        return seeded

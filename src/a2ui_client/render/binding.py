"""Data binding resolution: overlay first, then data model."""

from typing import Any

from a2ui_client.state import SurfaceStateStore


class DataBindingResolver:
    """Resolves binding paths against the store's overlay and data model."""

    def __init__(self, store: SurfaceStateStore) -> None:
        self.store = store

    def resolve(self, path: str | None) -> Any:
        """
        Resolve a binding path to a displayable value.

        A missing path, or a path with no value, resolves to "".
        A stored None counts as no value.
        """
        if not path:
            return ""

        value = self.store.overlay.get(path)
        if value is None:
            value = self.store.data_model.get(path)
        return "" if value is None else value

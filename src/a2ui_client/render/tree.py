"""Component Tree Resolver - registry walk into structural nodes."""

from typing import Callable

from a2ui_client.core import ResolutionError, get_logger, get_settings
from a2ui_client.core.config import MAX_TREE_DEPTH
from a2ui_client.monitoring import metrics_collector
from a2ui_client.protocol.models import (
    Button,
    Card,
    Column,
    Component,
    Row,
    Text,
    TextField,
    Unsupported,
)
from a2ui_client.render.binding import DataBindingResolver
from a2ui_client.render.nodes import (
    ButtonNode,
    CardNode,
    ColumnNode,
    ErrorNode,
    PlaceholderNode,
    RowNode,
    StructuralNode,
    TextFieldNode,
    TextNode,
)
from a2ui_client.state import SurfaceStateStore

logger = get_logger(__name__)

Path = tuple[str, ...]


class ComponentTreeResolver:
    """
    Walks the component registry from a given id.

    The ids on the current walk path are carried down the recursion. Revisiting
    one of them, or going deeper than ``max_depth``, raises ResolutionError.
    Child ids that are not registered become empty placeholders.
    """

    def __init__(
        self,
        store: SurfaceStateStore,
        bindings: DataBindingResolver | None = None,
        max_depth: int | None = None,
    ) -> None:
        self.store = store
        self.bindings = bindings or DataBindingResolver(store)
        self.max_depth = max_depth or get_settings().max_tree_depth
        if self.max_depth > MAX_TREE_DEPTH:
            raise ValueError(f"max_depth {self.max_depth} exceeds limit {MAX_TREE_DEPTH}")
        self._handlers: dict[str, Callable[[Component, Path, bool], StructuralNode]] = {
            "Column": self._column,
            "Row": self._row,
            "Card": self._card,
            "Text": self._text,
            "TextField": self._text_field,
            "Button": self._button,
            "Unsupported": self._unsupported,
        }

    def resolve(self, component_id: str) -> StructuralNode | None:
        """
        Resolve a component and everything below it.

        Returns:
            The structural tree, or None if the id is not registered

        Raises:
            ResolutionError: On a reference cycle or depth overflow anywhere below
        """
        if self.store.get_component(component_id) is None:
            return None
        return self._walk(component_id, (), isolate=False)

    def render(self, component_id: str | None = None) -> StructuralNode | None:
        """
        Resolve for display, defaulting to the surface root.

        Unlike ``resolve``, a failing subtree is replaced by an ErrorNode so
        the rest of the surface stays renderable.
        """
        if component_id is None:
            surface = self.store.surface
            if surface is None:
                return None
            component_id = surface.root_id

        if self.store.get_component(component_id) is None:
            return None
        return self._child(component_id, (), isolate=True)

    def _walk(self, component_id: str, path: Path, isolate: bool) -> StructuralNode:
        if component_id in path:
            cycle = path + (component_id,)
            raise ResolutionError(f"reference cycle: {' -> '.join(cycle)}", component_id, cycle)
        if len(path) >= self.max_depth:
            raise ResolutionError(
                f"component tree deeper than {self.max_depth}", component_id, path + (component_id,)
            )

        component = self.store.get_component(component_id)
        if component is None:
            return PlaceholderNode(component_id, reason="missing")

        return self._handlers[component.kind](component, path + (component_id,), isolate)

    def _child(self, component_id: str, path: Path, isolate: bool) -> StructuralNode:
        if not isolate:
            return self._walk(component_id, path, isolate)

        try:
            return self._walk(component_id, path, isolate)
        except ResolutionError as e:
            metrics_collector.record_resolution_error()
            logger.warning("subtree_unresolvable", component_id=component_id, error=str(e))
            return ErrorNode(component_id, error=str(e), path=e.path)

    # ========================================================================
    # Variants
    # ========================================================================

    def _column(self, comp: Column, path: Path, isolate: bool) -> StructuralNode:
        children = tuple(self._child(child_id, path, isolate) for child_id in comp.children)
        return ColumnNode(comp.id, children=children)

    def _row(self, comp: Row, path: Path, isolate: bool) -> StructuralNode:
        children = tuple(self._child(child_id, path, isolate) for child_id in comp.children)
        return RowNode(comp.id, children=children)

    def _card(self, comp: Card, path: Path, isolate: bool) -> StructuralNode:
        return CardNode(comp.id, child=self._child(comp.child, path, isolate))

    def _text(self, comp: Text, path: Path, isolate: bool) -> StructuralNode:
        # Literal text wins over the binding
        value = comp.text if comp.text else self.bindings.resolve(comp.binding_path)
        return TextNode(comp.id, value=value)

    def _text_field(self, comp: TextField, path: Path, isolate: bool) -> StructuralNode:
        return TextFieldNode(
            comp.id,
            label=comp.label or "",
            placeholder=comp.placeholder or "",
            value=self.bindings.resolve(comp.binding_path),
            binding_path=comp.binding_path,
        )

    def _button(self, comp: Button, path: Path, isolate: bool) -> StructuralNode:
        return ButtonNode(comp.id, text=comp.text, action=comp.action)

    def _unsupported(self, comp: Unsupported, path: Path, isolate: bool) -> StructuralNode:
        logger.debug("unsupported_component", component_id=comp.id, type=comp.type_name)
        return PlaceholderNode(comp.id, reason="unsupported")

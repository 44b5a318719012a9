"""
A2UI Protocol Models

NDJSON protocol between an agent server and this client.
Each line is one JSON object carrying one (occasionally more) message field:

  beginRendering   -- set surface identity and render root
  surfaceUpdate    -- upsert components into the registry (flat adjacency list)
  dataModelUpdate  -- shallow-merge values into the data model
  deleteSurface    -- drop a surface

Components arrive as ``{"id": ..., "<Variant>": {...}}`` and are decoded into a
tagged union keyed by ``kind``. Variants this client cannot render become
``Unsupported`` nodes.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


VARIANTS = ("Column", "Row", "Card", "Text", "TextField", "Button")


class ProtocolModel(BaseModel):
    """Base model for wire types: immutable, camelCase aliases accepted."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class ActionDescriptor(ProtocolModel):
    """Action attached to an interactive component."""

    type: str
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"type": self.type}
        if self.data:
            wire["data"] = dict(self.data)
        return wire


# ============================================================================
# Component variants
# ============================================================================


class ComponentBase(ProtocolModel):
    id: str


class Column(ComponentBase):
    kind: Literal["Column"] = "Column"
    children: tuple[str, ...] = ()


class Row(ComponentBase):
    kind: Literal["Row"] = "Row"
    children: tuple[str, ...] = ()


class Card(ComponentBase):
    kind: Literal["Card"] = "Card"
    child: str


class Text(ComponentBase):
    kind: Literal["Text"] = "Text"
    text: str | None = None
    binding_path: str | None = None


class TextField(ComponentBase):
    kind: Literal["TextField"] = "TextField"
    label: str | None = None
    placeholder: str | None = None
    binding_path: str | None = None


class Button(ComponentBase):
    kind: Literal["Button"] = "Button"
    text: str = ""
    action: ActionDescriptor


class Unsupported(ComponentBase):
    """A component type outside this client's catalog (Image, Icon, List, ...)."""

    kind: Literal["Unsupported"] = "Unsupported"
    type_name: str
    # Body as received; usually an object, but kept verbatim whatever its shape
    props: Any = Field(default_factory=dict)


Component = Annotated[
    Union[Column, Row, Card, Text, TextField, Button, Unsupported],
    Field(discriminator="kind"),
]

_component_adapter: TypeAdapter[Component] = TypeAdapter(Component)


def _binding_path(body: dict[str, Any]) -> str | None:
    binding = body.get("dataBinding")
    if isinstance(binding, dict) and binding.get("path"):
        return binding["path"]
    return body.get("bindingPath")


def component_from_wire(raw: Any) -> Component:
    """
    Convert a wire component ``{"id": ..., "<Variant>": {...}}`` to a typed node.

    Raises:
        ValueError: If the component has no id, no shape, or more than one
            recognized shape
    """
    if not isinstance(raw, dict):
        raise ValueError(f"component must be an object, got {type(raw).__name__}")

    comp_id = raw.get("id")
    if not isinstance(comp_id, str) or not comp_id:
        raise ValueError("component is missing a string 'id'")

    shapes = [key for key in raw if key in VARIANTS]
    if len(shapes) > 1:
        raise ValueError(f"component '{comp_id}' has multiple shapes: {', '.join(shapes)}")

    if not shapes:
        others = [key for key in raw if key != "id"]
        if not others:
            raise ValueError(f"component '{comp_id}' has no shape")
        return Unsupported(id=comp_id, type_name=others[0], props=raw[others[0]])

    kind = shapes[0]
    body = raw[kind]
    if not isinstance(body, dict):
        raise ValueError(f"component '{comp_id}' {kind} body must be an object")

    fields: dict[str, Any] = {"kind": kind, "id": comp_id}
    if kind in ("Column", "Row"):
        fields["children"] = body.get("children") or ()
    elif kind == "Card":
        fields["child"] = body.get("child")
    elif kind == "Text":
        fields["text"] = body.get("text")
        fields["binding_path"] = _binding_path(body)
    elif kind == "TextField":
        fields["label"] = body.get("label")
        fields["placeholder"] = body.get("placeholder")
        fields["binding_path"] = _binding_path(body)
    else:
        fields["text"] = body.get("text") or ""
        fields["action"] = body.get("action")

    return _component_adapter.validate_python(fields)


def component_to_wire(comp: Component) -> dict[str, Any]:
    """Inverse of ``component_from_wire``."""
    if isinstance(comp, Unsupported):
        props = dict(comp.props) if isinstance(comp.props, dict) else comp.props
        return {"id": comp.id, comp.type_name: props}

    body: dict[str, Any]
    if isinstance(comp, (Column, Row)):
        body = {"children": list(comp.children)}
    elif isinstance(comp, Card):
        body = {"child": comp.child}
    elif isinstance(comp, Button):
        body = {"text": comp.text, "action": comp.action.to_wire()}
    else:
        body = {}
        if isinstance(comp, TextField):
            if comp.label is not None:
                body["label"] = comp.label
            if comp.placeholder is not None:
                body["placeholder"] = comp.placeholder
        elif comp.text is not None:
            body["text"] = comp.text
        if comp.binding_path is not None:
            body["dataBinding"] = {"path": comp.binding_path}

    return {"id": comp.id, comp.kind: body}


# ============================================================================
# Messages (server -> client)
# ============================================================================


class BeginRendering(ProtocolModel):
    """Set the surface identity and the component to render from."""

    surface_id: str = Field(alias="surfaceId")
    root: str

    def to_wire(self) -> dict[str, Any]:
        return {"surfaceId": self.surface_id, "root": self.root}


class SurfaceUpdate(ProtocolModel):
    """Define or replace components of a surface."""

    surface_id: str = Field(default="", alias="surfaceId")
    components: tuple[Component, ...] = ()

    @field_validator("components", mode="before")
    @classmethod
    def _decode_components(cls, value: Any) -> Any:
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            raise ValueError("components must be a list")
        return tuple(
            item if isinstance(item, ComponentBase) else component_from_wire(item)
            for item in value
        )

    def to_wire(self) -> dict[str, Any]:
        return {
            "surfaceId": self.surface_id,
            "components": [component_to_wire(comp) for comp in self.components],
        }


class DataModelUpdate(ProtocolModel):
    """Shallow-merge values into the data model, keyed by binding path."""

    surface_id: str = Field(default="", alias="surfaceId")
    contents: dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        return {"surfaceId": self.surface_id, "contents": dict(self.contents)}


class DeleteSurface(ProtocolModel):
    """Remove a surface from the client."""

    surface_id: str = Field(alias="surfaceId")

    def to_wire(self) -> dict[str, Any]:
        return {"surfaceId": self.surface_id}


class Message(ProtocolModel):
    """One decoded NDJSON line. Fields are not mutually exclusive."""

    begin_rendering: BeginRendering | None = Field(default=None, alias="beginRendering")
    surface_update: SurfaceUpdate | None = Field(default=None, alias="surfaceUpdate")
    data_model_update: DataModelUpdate | None = Field(default=None, alias="dataModelUpdate")
    delete_surface: DeleteSurface | None = Field(default=None, alias="deleteSurface")

    @property
    def kinds(self) -> list[str]:
        """Wire names of the populated message fields, in wire order."""
        return [
            name
            for name, value in (
                ("beginRendering", self.begin_rendering),
                ("surfaceUpdate", self.surface_update),
                ("dataModelUpdate", self.data_model_update),
                ("deleteSurface", self.delete_surface),
            )
            if value is not None
        ]

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {}
        if self.begin_rendering is not None:
            wire["beginRendering"] = self.begin_rendering.to_wire()
        if self.surface_update is not None:
            wire["surfaceUpdate"] = self.surface_update.to_wire()
        if self.data_model_update is not None:
            wire["dataModelUpdate"] = self.data_model_update.to_wire()
        if self.delete_surface is not None:
            wire["deleteSurface"] = self.delete_surface.to_wire()
        return wire


# ============================================================================
# Events (client -> server)
# ============================================================================


class ClientEvent(ProtocolModel):
    """User interaction reported back to the agent server."""

    surface_id: str = Field(alias="surfaceId")
    component_id: str = Field(alias="componentId")
    type: str = "action"
    data: dict[str, Any] = Field(default_factory=dict)


class EventEnvelope(ProtocolModel):
    """POST body wrapper: ``{"event": {...}}``."""

    event: ClientEvent

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from a2ui_client.actions import ActionDispatcher, SubmitPayloadBuilder
from a2ui_client.clients import HttpTransport, Transport
from a2ui_client.core.config import Settings, get_settings
from a2ui_client.protocol import MessageDecoder
from a2ui_client.render import ComponentTreeResolver, DataBindingResolver
from a2ui_client.state import SurfaceStateStore


class SurfaceModule(Module):
    """Everything one client-side surface needs, built from settings."""

    def __init__(self, settings: Settings | None = None, transport: Transport | None = None) -> None:
        self.settings = settings or get_settings()
        self.transport = transport

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_store(self, settings: Settings) -> SurfaceStateStore:
        return SurfaceStateStore(form_prefix=settings.form_prefix)

    @singleton
    @provider
    def provide_bindings(self, store: SurfaceStateStore) -> DataBindingResolver:
        return DataBindingResolver(store)

    @singleton
    @provider
    def provide_tree(
        self, store: SurfaceStateStore, bindings: DataBindingResolver, settings: Settings
    ) -> ComponentTreeResolver:
        return ComponentTreeResolver(store, bindings, settings.max_tree_depth)

    @singleton
    @provider
    def provide_transport(self, settings: Settings) -> Transport:
        """Caller-supplied transport, or an HTTP one owned by the container."""
        if self.transport is not None:
            return self.transport
        return HttpTransport(timeout=settings.request_timeout)

    @singleton
    @provider
    def provide_decoder(self, settings: Settings) -> MessageDecoder:
        return MessageDecoder(settings.max_line_bytes, settings.max_json_depth)

    @singleton
    @provider
    def provide_payload_builder(self, settings: Settings) -> SubmitPayloadBuilder:
        return SubmitPayloadBuilder(
            form_prefix=settings.form_prefix,
            include_extra=settings.submit_extra_fields,
        )

    @singleton
    @provider
    def provide_dispatcher(
        self,
        store: SurfaceStateStore,
        transport: Transport,
        decoder: MessageDecoder,
        payload_builder: SubmitPayloadBuilder,
        settings: Settings,
    ) -> ActionDispatcher:
        return ActionDispatcher(
            store,
            transport,
            decoder=decoder,
            base_url=settings.base_url,
            payload_builder=payload_builder,
            clear_overlay_on_navigate=settings.clear_overlay_on_navigate,
            submit_component_id=settings.submit_component_id,
        )


def create_container(settings: Settings | None = None, transport: Transport | None = None) -> Injector:
    """Create configured injector."""
    return Injector([SurfaceModule(settings, transport)])

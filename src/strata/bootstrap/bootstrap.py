"""Bootstrap a container: environment, composed namespaces and live updates."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from strata import config
from strata.adapters.memory_config import InMemoryConfigService
from strata.composition import (
    LOWEST_PRECEDENCE,
    BootstrapPhaseInitializer,
    CompositionContext,
    PropertySourcesProcessor,
)
from strata.environment import standard_environment
from strata.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from strata.domain.events import Event
    from strata.environment import Environment
    from strata.interfaces.config_service import ConfigService


@dataclass(frozen=True, eq=False)
class AppContainer:
    """A class to hold application wiring.

    Containers compare and hash by identity; that identity is what live-update
    wiring is guarded on.
    """

    environment: Environment
    message_bus: MessageBus
    context: CompositionContext

    def publish(self, event: Event) -> None:
        self.message_bus.publish(event)

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self.environment.get_property(key, default)


def build_message_bus(
    environment: Environment,
    event_handlers: Mapping[type[Event], Sequence[Callable[..., None]]] | None = None,
) -> MessageBus:
    """Build a message bus whose handlers may ask for the `environment`."""
    dependencies = {"environment": environment}
    injected_event_handlers = {
        event_type: [inject_dependencies(handler, dependencies) for handler in handlers]
        for event_type, handlers in (event_handlers or {}).items()
    }
    return MessageBus(injected_event_handlers)


def bootstrap(  # pylint: disable=too-many-arguments
    config_service: ConfigService | None = None,
    *,
    namespaces: Iterable[str] = (),
    order: int = LOWEST_PRECEDENCE,
    environment: Environment | None = None,
    context: CompositionContext | None = None,
    event_handlers: Mapping[type[Event], Sequence[Callable[..., None]]] | None = None,
) -> AppContainer:
    """Assemble a container with remote namespaces composed into its environment.

    Args:
        config_service: Remote config client. Defaults to namespaces loaded from
            the directory named by ``STRATA_CONFIG_DIR``.
        namespaces: Namespaces to declare before composing.
        order: Priority for `namespaces` (lower is looked up first).
        environment: Target environment; defaults to `standard_environment()`.
        context: Shared composition state; a fresh one is created by default.
        event_handlers: Handlers for container events, e.g. `RemoteConfigChanged`.

    Raises:
        ConfigDirNotSetError: If no service is given and ``STRATA_CONFIG_DIR`` is unset.
        InvalidConfigReferenceError: If a namespace placeholder cannot be resolved.
    """
    if context is None:
        if config_service is None:
            config_service = InMemoryConfigService.from_directory(
                config.get_config_dir()
            )
        context = CompositionContext(config_service)
    environment = environment if environment is not None else standard_environment()

    bootstrap_phase = BootstrapPhaseInitializer(context)
    bootstrap_phase.post_process_environment(environment)
    bootstrap_phase.initialize(environment)

    if namespaces:
        context.enable_config(namespaces, order, environment)

    container = AppContainer(
        environment=environment,
        message_bus=build_message_bus(environment, event_handlers),
        context=context,
    )
    PropertySourcesProcessor(context).on_container_init(container)
    return container


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    if not deps:
        return handler
    return lambda message: handler(message, **deps)

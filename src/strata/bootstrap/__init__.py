"""Bootstrap (composition root) for STRATA.

Assembles a container at runtime: builds the environment, runs the bootstrap
phase, composes the declared namespaces into the environment and wires live
updates onto the container's message bus.

Import rules:
- Entry points import *this* package (not adapters/composition internals).
- This package may import: `strata.adapters`, `strata.composition`,
  `strata.service_layer`, `strata.environment`, `strata.interfaces`,
  `strata.domain`, and `strata.config`.
- Inner layers must not import `strata.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, build_message_bus

__all__ = ["AppContainer", "bootstrap", "build_message_bus"]

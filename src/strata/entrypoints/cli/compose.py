"""Inspection commands: compose namespaces and show the resulting lookup chain.

Namespaces are read from ``<config-dir>/<namespace>.json``. Flags such as
``strata.bootstrap.enabled`` can be passed as ``-D NAME=VALUE`` system
properties or set as environment variables (``STRATA_BOOTSTRAP_ENABLED``).

Examples
    $ strata chain -n application -n db --config-dir ./config
    $ strata get -n application server.port --config-dir ./config
    $ strata chain -D strata.bootstrap.enabled -D strata.bootstrap.namespaces=infra
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from strata.adapters.memory_config import InMemoryConfigService, NamespaceNotFoundError
from strata.bootstrap import bootstrap
from strata.composition import LOWEST_PRECEDENCE, CompositePropertySource
from strata.domain.errors import StrataError
from strata.environment import standard_environment

from .helpers import parse_properties

if TYPE_CHECKING:
    from collections.abc import Callable

    from strata.bootstrap import AppContainer

logger = logging.getLogger(__name__)


_COMPOSITION_OPTIONS = (
    click.option(
        "--config-dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        required=True,
        envvar="STRATA_CONFIG_DIR",
        show_envvar=True,
        help="Directory holding one <namespace>.json file per namespace.",
    ),
    click.option(
        "-n",
        "--namespace",
        "namespaces",
        multiple=True,
        help="Namespace to compose (repeatable; earlier wins within the same order).",
    ),
    click.option(
        "--order",
        type=int,
        default=LOWEST_PRECEDENCE,
        show_default=True,
        help="Priority of the declared namespaces (lower is looked up first).",
    ),
    click.option(
        "-D",
        "--define",
        "properties",
        multiple=True,
        callback=parse_properties,
        help="System property NAME=VALUE (repeatable), e.g. -D strata.bootstrap.enabled=true.",
    ),
)


def composition_options(fn: Callable) -> Callable:
    """Attach the options shared by every inspection command."""
    for option in reversed(_COMPOSITION_OPTIONS):
        fn = option(fn)
    return fn


def compose(
    config_dir: Path,
    namespaces: tuple[str, ...],
    order: int,
    properties: dict[str, str],
) -> AppContainer:
    """Bootstrap a container from CLI arguments, mapping failures to Click errors."""
    try:
        service = InMemoryConfigService.from_directory(config_dir)
        return bootstrap(
            service,
            namespaces=namespaces,
            order=order,
            environment=standard_environment(properties),
        )
    except (NamespaceNotFoundError, StrataError, ValueError) as e:
        logger.debug("Composition failed", exc_info=True)
        raise click.ClickException(str(e)) from e


@click.command()
@composition_options
def chain(
    config_dir: Path,
    namespaces: tuple[str, ...],
    order: int,
    properties: dict[str, str],
) -> None:
    """Print the property-source chain in lookup order."""
    container = compose(config_dir, namespaces, order, properties)
    for position, source in enumerate(container.environment.property_sources, 1):
        click.echo(f"{position}. {source.name}")
        if isinstance(source, CompositePropertySource):
            for member in source.property_sources:
                click.echo(f"   - {member.name}")


@click.command()
@composition_options
@click.argument("keys", nargs=-1, required=True)
@click.pass_context
def get(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    config_dir: Path,
    namespaces: tuple[str, ...],
    order: int,
    properties: dict[str, str],
    keys: tuple[str, ...],
) -> None:
    """Print the resolved value of each KEY and the source that supplied it."""
    container = compose(config_dir, namespaces, order, properties)
    environment = container.environment
    missing = 0
    for key in keys:
        if (source := environment.find_source(key)) is None:
            click.echo(f"{key} is not defined", err=True)
            missing += 1
            continue
        origin = source.name
        if isinstance(source, CompositePropertySource) and (
            member := source.find_source(key)
        ):
            origin = f"{source.name}/{member.name}"
        click.echo(f"{key}={environment.get_property(key)}\t({origin})")
    if missing:
        ctx.exit(1)

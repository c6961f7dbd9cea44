"""Click callback for ``-D NAME=VALUE`` system-property options."""

import click


def parse_properties(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...] | None,
) -> dict[str, str]:
    """Parse NAME=VALUE pairs into a dict; later items override earlier ones.

    Values are taken verbatim, so commas survive
    (``-D strata.bootstrap.namespaces=application,db``). A bare NAME (no
    ``=``) is read as ``NAME=true`` so flags can be switched on with
    ``-D strata.bootstrap.enabled``.

    Raises:
        click.BadParameter: If an item has an empty name.
    """
    properties: dict[str, str] = {}
    if isinstance(value, str):
        value = (value,)
    for item in value or ():
        name, sep, raw = item.partition("=")
        if not name.strip():
            raise click.BadParameter(f"Expected NAME=VALUE, got {item!r}")
        properties[name.strip()] = raw.strip() if sep else "true"
    return properties

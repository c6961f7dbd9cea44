"""Click callback for ``-L NAME=LEVEL`` per-logger level options.

Values may be repeated (``-L a=INFO -L b=DEBUG``) or packed into one string
separated by commas or whitespace, which is how they arrive from an
environment variable.
"""

import logging
import re

import click

# Third-party loggers quietened unless the user says otherwise
DEFAULT_LIB_LEVELS = {"click_extra": logging.WARNING}

_SEPARATORS = re.compile(r"[,\s]+")


def normalize_items(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Flatten one string or a sequence of strings into non-empty items."""
    if value is None:
        return []
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in _SEPARATORS.split(chunk) if item]


def _level_number(text: str) -> int:
    levels = logging.getLevelNamesMapping()
    try:
        return levels[text.strip().upper()]
    except KeyError as e:
        raise click.BadParameter(
            f"Invalid log level: {text!r} (choose from {', '.join(levels)})"
        ) from e


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Turn NAME=LEVEL items into a logger-name to level mapping.

    Starts from `DEFAULT_LIB_LEVELS`; a later item for the same logger wins.
    Level names are case-insensitive.

    Raises:
        click.BadParameter: On an item without ``=``, an empty name or an
            unknown level name.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in normalize_items(value):
        name, sep, level = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = _level_number(level)
    return levels

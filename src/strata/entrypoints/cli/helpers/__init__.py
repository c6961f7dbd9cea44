"""CLI helpers for STRATA.

Click callbacks that parse repeatable ``NAME=VALUE`` options, either given as
separate flags or as a comma/space-separated environment variable.
"""

from .log_level_parser import parse_log_level
from .property_parser import parse_properties

__all__ = ["parse_log_level", "parse_properties"]

"""Entry points for STRATA (command-line interface)."""

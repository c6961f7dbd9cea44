"""STRATA command-line interface."""

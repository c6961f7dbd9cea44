"""Domain layer for STRATA.

Contains the events published when remote configuration changes and the
error taxonomy shared by the composition engine. This package is
deliberately technology-agnostic.

Dependency rule: do not import from `strata.adapters` or `strata.entrypoints`.
"""

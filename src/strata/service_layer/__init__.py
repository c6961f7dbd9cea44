"""Service layer for STRATA.

Hosts the container-wide message bus that change events are published on.
"""

"""STRATA

Namespace-ordered configuration layering for Python applications.
Composes remotely fetched configuration namespaces into a single
precedence-aware lookup chain and keeps it live as remote values change.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

"""Domain-layer error definitions."""

# ============================================================================
#                           General errors
# ============================================================================


class StrataError(Exception):
    """Base class for STRATA errors."""


# ============================================================================
#                   Placeholder / reference errors
# ============================================================================


class UnresolvablePlaceholderError(StrataError, ValueError):
    """Raised when a `${...}` placeholder cannot be resolved against the environment."""

    def __init__(self, placeholder: str, text: str) -> None:
        super().__init__(
            f"Could not resolve placeholder '{placeholder}' in value \"{text}\"."
        )
        self.placeholder = placeholder
        self.text = text


class CircularPlaceholderError(UnresolvablePlaceholderError):
    """Raised when a placeholder refers back to itself through other properties."""

    def __init__(self, placeholder: str, text: str) -> None:
        StrataError.__init__(
            self, f"Circular placeholder reference '{placeholder}' in value \"{text}\"."
        )
        self.placeholder = placeholder
        self.text = text


class InvalidConfigReferenceError(StrataError):
    """Raised when a declared namespace name references an unresolvable placeholder.

    This is fatal to container startup and is never retried.
    """

    def __init__(self, namespace: str, placeholder: str) -> None:
        super().__init__(
            f"Invalid configuration reference in namespace '{namespace}': "
            f"placeholder '{placeholder}' could not be resolved."
        )
        self.namespace = namespace
        self.placeholder = placeholder


# ============================================================================
#                   Flag errors
# ============================================================================


class InvalidFlagValueError(StrataError, ValueError):
    """Raised when a boolean flag holds something other than a boolean literal."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__(f"Flag '{key}' expects a boolean, got '{value}'.")
        self.key = key
        self.value = value

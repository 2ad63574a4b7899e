"""Exceptions raised while finalizing builders and reading live resources."""


class BuilderError(Exception):
    """Base class for all builder errors."""


class MissingConfigurationError(BuilderError, ValueError):
    """Raised when a required configuration field is absent at finalization.

    Attributes:
        resource: Description of the resource being built.
        field: Name of the missing configuration field.
    """

    def __init__(self, resource: str, field: str) -> None:
        self.resource = resource
        self.field = field
        super().__init__(
            f"{field.replace('_', ' ')} is required for {resource}"
        )


class ResourceNotCreatedError(BuilderError, RuntimeError):
    """Raised when a live attribute is read before the resource exists."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(
            f"{resource} has not been created yet. Ensure it was added to a "
            "stack before referencing it."
        )


class ResourceAlreadyAttachedError(BuilderError, RuntimeError):
    """Raised when a live resource is attached to a spec a second time."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"{resource} already has a live resource attached")

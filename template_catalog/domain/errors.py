"""Errors raised by the catalog core."""


class InvalidSchemaError(ValueError):
    """Raised when a template definition cannot be loaded into the catalog."""

    def __init__(self, message: str, *, template_id: str | None = None) -> None:
        super().__init__(message)
        self.template_id = template_id


class RepositoryUnavailableError(RuntimeError):
    """Raised when the template repository or favorites store cannot be reached."""


__all__ = ["InvalidSchemaError", "RepositoryUnavailableError"]

"""Exceptions raised by the organization engine."""


class OrganizationError(Exception):
    """Base class for all organization errors."""

    pass


class ContentionError(OrganizationError):
    """The source path is currently processed by another operation."""

    def __init__(self, path: str = "") -> None:
        self.path = path
        super().__init__("Path is currently processed otherwise. Please try again later.")


class ConfigurationError(OrganizationError):
    """Invalid configuration or request (missing target path, unknown result, unsupported type)."""

    pass

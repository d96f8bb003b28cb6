"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised when settings are missing or inconsistent."""

    pass


class DependencyInjectionError(UtilError):
    """Raised when a provider cannot be resolved for a component."""

    pass

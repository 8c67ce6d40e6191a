"""Exceptions raised inside the service manager.

Service verbs never let these escape; they are translated into
``ActionResult`` failures at the verb boundary.
"""

from pathlib import Path


class ServiceError(Exception):
    """Base class for service manager errors."""


class ConfigError(ServiceError):
    """The service configuration file could not be loaded."""


class NotPackagedError(ServiceError):
    """Raised when paths are requested outside an installed app bundle."""

    def __init__(self, message: str = "Not running from a packaged app bundle"):
        super().__init__(message)


class PathResolutionError(ServiceError):
    """A path the worker needs is missing from the bundle."""

    def __init__(self, name: str, path: Path | str):
        self.name = name
        self.path = str(path)
        super().__init__(f"{name} not found: {self.path}")

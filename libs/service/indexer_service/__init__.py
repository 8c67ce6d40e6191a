"""M24 Tools indexer service manager."""

from indexer_service.actions import ServiceActions
from indexer_service.config import ConfigManager, ServiceConfig
from indexer_service.models import ActionResult, ServiceErrorKind
from indexer_service.process_manager import (
    LaunchctlManager,
    PathResolver,
    PlistGenerator,
)

__all__ = [
    # Actions
    "ServiceActions",
    "ActionResult",
    "ServiceErrorKind",
    # Config
    "ConfigManager",
    "ServiceConfig",
    # Process Manager
    "LaunchctlManager",
    "PathResolver",
    "PlistGenerator",
]

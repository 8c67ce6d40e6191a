"""Data models for the indexer service manager."""

from indexer_service.models.actions import ActionResult, ServiceErrorKind
from indexer_service.models.launchctl import LaunchctlResult
from indexer_service.models.service import ResolvedPaths, ServiceDescriptor

__all__ = [
    "ActionResult",
    "LaunchctlResult",
    "ResolvedPaths",
    "ServiceDescriptor",
    "ServiceErrorKind",
]

"""Launch agent plumbing: paths, plist descriptors and launchctl."""

from indexer_service.process_manager.launchctl_manager import (
    LaunchctlManager,
    ServiceControlUtility,
    parse_list_output,
)
from indexer_service.process_manager.paths import PathResolver
from indexer_service.process_manager.plist_generator import PlistGenerator

__all__ = [
    "LaunchctlManager",
    "PathResolver",
    "PlistGenerator",
    "ServiceControlUtility",
    "parse_list_output",
]

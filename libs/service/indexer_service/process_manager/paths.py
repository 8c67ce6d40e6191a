"""Path resolution inside the installed M24 Tools app bundle."""

import os
import sys
from pathlib import Path

from indexer_service.config import ServiceConfig
from indexer_service.errors import NotPackagedError, PathResolutionError
from indexer_service.models.service import ResolvedPaths
from indexer_service.process_manager.plist_generator import PlistGenerator


class PathResolver:
    """Derives the worker's paths from the running executable.

    In a packaged build the executable lives at
    ``M24 Tools.app/Contents/MacOS/<exe>``; everything the worker needs sits
    under ``Contents/Resources``. Nothing here touches the filesystem except
    ``validate``.
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        executable: str | None = None,
    ):
        """Initialize the resolver.

        Args:
            config: Service configuration (layout and log locations)
            executable: Executable path, defaults to ``sys.executable``
        """
        self.config = config or ServiceConfig()
        self.executable = executable or sys.executable

    def is_packaged(self) -> bool:
        """Check whether we run from a packaged (frozen) app bundle."""
        if self.config.packaged is not None:
            return self.config.packaged
        return bool(getattr(sys, "frozen", False))

    def resolve(self) -> ResolvedPaths:
        """Compute the bundle paths for the launch agent.

        Raises:
            NotPackagedError: When not running from a packaged build
        """
        if not self.is_packaged():
            raise NotPackagedError(
                "Install is only supported in packaged builds. "
                "In development the worker runs inside the app process."
            )

        exec_path = Path(self.executable)
        resources_dir = Path(
            os.path.normpath(exec_path.parent / self.config.resources_relpath)
        )
        log_dir = self.config.log_path

        return ResolvedPaths(
            exec_path=str(exec_path),
            resources_dir=str(resources_dir),
            worker_entry=str(resources_dir / self.config.worker_entry_relpath),
            bin_dir=str(resources_dir / self.config.bin_dir_relpath),
            plist_path=str(
                PlistGenerator.get_plist_path(
                    self.config.label, self.config.launch_agents_path
                )
            ),
            stdout_path=str(log_dir / self.config.stdout_log_name),
            stderr_path=str(log_dir / self.config.stderr_log_name),
        )

    @staticmethod
    def validate(paths: ResolvedPaths) -> None:
        """Ensure the bundled worker entry and binaries directory exist.

        Raises:
            PathResolutionError: Naming the first missing path
        """
        if not Path(paths.worker_entry).is_file():
            raise PathResolutionError("Worker entry", paths.worker_entry)
        if not Path(paths.bin_dir).is_dir():
            raise PathResolutionError("Bin dir", paths.bin_dir)

"""Lifecycle verbs for the indexer launch agent."""

import threading
from collections.abc import Callable
from pathlib import Path

from indexer_service.config import ServiceConfig
from indexer_service.errors import NotPackagedError, PathResolutionError
from indexer_service.models.actions import ActionResult, ServiceErrorKind
from indexer_service.models.launchctl import LaunchctlResult
from indexer_service.process_manager import (
    LaunchctlManager,
    PathResolver,
    PlistGenerator,
    ServiceControlUtility,
    parse_list_output,
)
from m24_logging import get_logger

_label_locks: dict[str, threading.Lock] = {}
_label_locks_guard = threading.Lock()


def _lock_for(label: str) -> threading.Lock:
    with _label_locks_guard:
        return _label_locks.setdefault(label, threading.Lock())


def _failure(
    kind: ServiceErrorKind,
    message: str,
    data: dict | None = None,
) -> ActionResult:
    return ActionResult(success=False, message=message, error=kind, data=data)


class ServiceActions:
    """Install, uninstall, restart and query the indexer launch agent.

    The plist under ~/Library/LaunchAgents is the only state; nothing about
    it is cached here, so every question goes through ``status``. Each verb
    returns an ``ActionResult`` and never raises.

    Mutating verbs are serialized per label within this process. Callers
    driving the same label from several processes must serialize themselves.
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        utility: ServiceControlUtility | None = None,
        resolver: PathResolver | None = None,
    ):
        """Initialize service actions.

        Args:
            config: Service configuration
            utility: launchctl adapter (a fake in tests)
            resolver: Bundle path resolver
        """
        self.config = config or ServiceConfig()
        self.utility = utility or LaunchctlManager(timeout=self.config.launchctl_timeout)
        self.resolver = resolver or PathResolver(self.config)
        self.logger = get_logger("service.actions")

    @property
    def label(self) -> str:
        return self.config.label

    @property
    def plist_path(self) -> Path:
        return PlistGenerator.get_plist_path(self.label, self.config.launch_agents_path)

    def status(self) -> ActionResult:
        """Report whether launchd currently has the agent loaded.

        A non-zero exit from ``launchctl list`` means "not loaded", not an
        error, so this always succeeds.
        """
        result = self.utility.query(self.label)
        loaded = result.success

        try:
            plist_exists = self.plist_path.exists()
        except OSError as e:
            self.logger.warning("Cannot check plist", plist_path=str(self.plist_path), error=str(e))
            plist_exists = None

        data = {
            "loaded": loaded,
            "plist_path": str(self.plist_path),
            "plist_exists": plist_exists,
            "exit_code": result.exit_code,
            "stdout": result.stdout,
            "stderr": result.stderr,
        }
        if loaded:
            fields = parse_list_output(result.stdout)
            if "PID" in fields:
                data["pid"] = fields["PID"]
            if "LastExitStatus" in fields:
                data["last_exit_status"] = fields["LastExitStatus"]

        return ActionResult(
            success=True,
            message="Indexer service is loaded" if loaded else "Indexer service is not loaded",
            data=data,
        )

    def install(self) -> ActionResult:
        """Write a fresh plist for the bundled worker and load it."""
        with _lock_for(self.label):
            self.logger.info("Installing indexer service", label=self.label)

            if not self.resolver.is_packaged():
                return _failure(
                    ServiceErrorKind.UNSUPPORTED_CONTEXT,
                    "Install is only supported in packaged builds. "
                    "In development the worker runs when the app runs.",
                )

            failed = self._write_descriptor()
            if failed:
                return failed

            self._best_effort(
                "unload before load", lambda: self.utility.unregister(self.plist_path)
            )

            load = self.utility.register(self.plist_path)
            if not load.success:
                message = load.diagnostic("launchctl load failed")
                self.logger.error("launchctl load failed", exit_code=load.exit_code, error=message)
                return _failure(
                    ServiceErrorKind.REGISTRATION_FAILED,
                    message,
                    data={"exit_code": load.exit_code, "plist_path": str(self.plist_path)},
                )

            self.logger.info("Indexer service installed", plist_path=str(self.plist_path))
            return ActionResult(
                success=True,
                message=f"Indexer service installed at {self.plist_path}",
                data={"plist_path": str(self.plist_path)},
            )

    def uninstall(self) -> ActionResult:
        """Unload the agent and delete its plist; a missing plist is fine."""
        with _lock_for(self.label):
            self.logger.info("Uninstalling indexer service", label=self.label)

            self._best_effort(
                "unload before delete", lambda: self.utility.unregister(self.plist_path)
            )

            try:
                self.plist_path.unlink(missing_ok=True)
            except OSError as e:
                self.logger.error("Failed to remove plist", plist_path=str(self.plist_path), error=str(e))
                return _failure(ServiceErrorKind.FILE_SYSTEM, str(e))

            self.logger.info("Indexer service uninstalled")
            return ActionResult(success=True, message="Indexer service uninstalled")

    def restart(self) -> ActionResult:
        """Unload and reload the installed plist.

        The plist is reused as-is unless ``rebuild_on_restart`` is set, in
        which case it is regenerated from the current bundle first. There is
        no check that a plist exists; launchctl's refusal is the failure.
        """
        with _lock_for(self.label):
            self.logger.info("Restarting indexer service", label=self.label)

            if self.config.rebuild_on_restart:
                failed = self._write_descriptor()
                if failed:
                    return failed

            self._best_effort(
                "unload before reload", lambda: self.utility.unregister(self.plist_path)
            )

            load = self.utility.register(self.plist_path)
            if not load.success:
                message = load.diagnostic("restart failed")
                self.logger.error("Restart failed", exit_code=load.exit_code, error=message)
                return _failure(
                    ServiceErrorKind.RESTART_FAILED,
                    message,
                    data={"exit_code": load.exit_code},
                )

            self.logger.info("Indexer service restarted")
            return ActionResult(success=True, message="Indexer service restarted")

    def get_log_paths(self) -> tuple[Path, Path]:
        """Return the worker's (stdout, stderr) log files."""
        log_dir = self.config.log_path
        return log_dir / self.config.stdout_log_name, log_dir / self.config.stderr_log_name

    def _write_descriptor(self) -> ActionResult | None:
        """Resolve, validate and write the plist. Returns a failure or None."""
        try:
            self.config.launch_agents_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return _failure(ServiceErrorKind.FILE_SYSTEM, f"Failed to create LaunchAgents dir: {e}")

        try:
            paths = self.resolver.resolve()
            self.resolver.validate(paths)
        except NotPackagedError as e:
            return _failure(ServiceErrorKind.UNSUPPORTED_CONTEXT, str(e))
        except PathResolutionError as e:
            self.logger.error("Bundled path missing", missing=e.name, path=e.path)
            return _failure(
                ServiceErrorKind.PATH_RESOLUTION,
                str(e),
                data={"missing": e.name, "path": e.path},
            )

        descriptor = PlistGenerator.build_descriptor(
            paths,
            self.label,
            bin_dir_env_var=self.config.bin_dir_env_var,
            process_type=self.config.process_type,
        )
        try:
            PlistGenerator.write_plist(descriptor, self.plist_path)
        except OSError as e:
            self.logger.error("Failed to write plist", plist_path=str(self.plist_path), error=str(e))
            return _failure(ServiceErrorKind.FILE_SYSTEM, f"Failed to write plist: {e}")

        self.logger.debug("Plist written", plist_path=str(self.plist_path))
        return None

    def _best_effort(self, step: str, op: Callable[[], LaunchctlResult]) -> LaunchctlResult:
        """Run a cleanup step whose failure does not change the verb's outcome."""
        result = op()
        if not result.success:
            self.logger.debug(
                "Ignoring failed cleanup step",
                step=step,
                exit_code=result.exit_code,
                error=result.diagnostic(""),
            )
        return result

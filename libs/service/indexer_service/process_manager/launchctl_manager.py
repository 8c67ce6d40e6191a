"""macOS launchctl adapter for the indexer launch agent."""

import re
import subprocess
from pathlib import Path
from typing import Protocol

from indexer_service.models.launchctl import LaunchctlResult
from m24_logging import get_logger

# `launchctl list <label>` prints a dictionary like:  "PID" = 4242;
_LIST_FIELD = re.compile(r'^\s*"(?P<key>[A-Za-z]+)"\s*=\s*(?P<value>-?\d+);', re.MULTILINE)


class ServiceControlUtility(Protocol):
    """The service-control operations the controller relies on."""

    def query(self, label: str) -> LaunchctlResult:
        ...

    def register(self, plist_path: Path) -> LaunchctlResult:
        ...

    def unregister(self, plist_path: Path) -> LaunchctlResult:
        ...


class LaunchctlManager:
    """Runs launchctl as a blocking subprocess.

    ``query`` maps to ``launchctl list <label>``, ``register`` to
    ``launchctl load <plist>`` and ``unregister`` to
    ``launchctl unload <plist>``. Exit status 0 is success; nothing is
    raised, every outcome comes back as a ``LaunchctlResult``.
    """

    def __init__(self, executable: str = "launchctl", timeout: float | None = None):
        """Initialize the adapter.

        Args:
            executable: launchctl binary to invoke
            timeout: Seconds before a call is abandoned; None waits forever
        """
        self.executable = executable
        self.timeout = timeout
        self._logger = get_logger("service.launchctl")

    def query(self, label: str) -> LaunchctlResult:
        return self._run_launchctl("list", label)

    def register(self, plist_path: Path) -> LaunchctlResult:
        return self._run_launchctl("load", str(plist_path))

    def unregister(self, plist_path: Path) -> LaunchctlResult:
        return self._run_launchctl("unload", str(plist_path))

    def _run_launchctl(self, *args: str) -> LaunchctlResult:
        """Run a launchctl command.

        Args:
            *args: Arguments to pass to launchctl

        Returns:
            LaunchctlResult with command output
        """
        self._logger.debug("Running launchctl", command=" ".join(args))
        try:
            result = subprocess.run(
                [self.executable, *args],
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            return LaunchctlResult(
                success=False,
                message=f"{self.executable} command not found",
                exit_code=127,
            )
        except subprocess.TimeoutExpired:
            return LaunchctlResult(
                success=False,
                message=f"{self.executable} {args[0]} timed out after {self.timeout}s",
                exit_code=124,
            )
        except (subprocess.SubprocessError, OSError) as e:
            return LaunchctlResult(
                success=False,
                message=f"Command failed: {e}",
                exit_code=1,
                stderr=str(e),
            )

        stdout = (result.stdout or "").strip()
        stderr = (result.stderr or "").strip()
        success = result.returncode == 0

        return LaunchctlResult(
            success=success,
            message=stdout if success else stderr or stdout,
            exit_code=result.returncode,
            stdout=stdout,
            stderr=stderr,
        )


def parse_list_output(output: str) -> dict[str, int]:
    """Extract integer fields (PID, LastExitStatus) from `launchctl list <label>`."""
    return {m.group("key"): int(m.group("value")) for m in _LIST_FIELD.finditer(output)}

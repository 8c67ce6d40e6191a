"""Plist generator for the indexer launch agent."""

import os
import plistlib
import tempfile
from pathlib import Path
from typing import Any

from indexer_service.models.service import ResolvedPaths, ServiceDescriptor


class PlistGenerator:
    """Builds launch agent descriptors and reads/writes their plist files."""

    @staticmethod
    def build_descriptor(
        paths: ResolvedPaths,
        label: str,
        bin_dir_env_var: str = "M24_BIN_DIR",
        process_type: str = "Background",
    ) -> ServiceDescriptor:
        """Build the descriptor that keeps the indexer worker running.

        The app executable runs the worker entry directly (no shell), is
        started on load and relaunched by launchd whenever it exits.

        Args:
            paths: Resolved bundle paths
            label: Launch agent label
            bin_dir_env_var: Variable pointing the worker at its binaries
            process_type: launchd ProcessType

        Returns:
            A fully populated descriptor
        """
        return ServiceDescriptor(
            label=label,
            program_path=paths.exec_path,
            program_arguments=[paths.worker_entry],
            environment_variables={bin_dir_env_var: paths.bin_dir},
            run_at_load=True,
            keep_alive=True,
            stdout_path=paths.stdout_path,
            stderr_path=paths.stderr_path,
            process_type=process_type,
        )

    @staticmethod
    def generate_plist(descriptor: ServiceDescriptor) -> dict[str, Any]:
        """Generate a plist dictionary from a descriptor.

        Args:
            descriptor: Launch agent descriptor

        Returns:
            Dictionary suitable for plistlib serialization
        """
        plist_dict: dict[str, Any] = {
            "Label": descriptor.label,
            "ProgramArguments": [descriptor.program_path, *descriptor.program_arguments],
            "RunAtLoad": descriptor.run_at_load,
            "KeepAlive": descriptor.keep_alive,
        }

        if descriptor.environment_variables:
            plist_dict["EnvironmentVariables"] = dict(descriptor.environment_variables)

        if descriptor.stdout_path:
            plist_dict["StandardOutPath"] = descriptor.stdout_path

        if descriptor.stderr_path:
            plist_dict["StandardErrorPath"] = descriptor.stderr_path

        if descriptor.process_type:
            plist_dict["ProcessType"] = descriptor.process_type

        return plist_dict

    @staticmethod
    def dumps(descriptor: ServiceDescriptor) -> bytes:
        """Serialize a descriptor as XML plist bytes (keys sorted)."""
        return plistlib.dumps(
            PlistGenerator.generate_plist(descriptor),
            fmt=plistlib.FMT_XML,
            sort_keys=True,
        )

    @staticmethod
    def write_plist(descriptor: ServiceDescriptor, output_path: Path) -> None:
        """Write the plist, replacing any existing file atomically.

        The content goes to a temporary file in the same directory which is
        then renamed over ``output_path``, so launchd never reads a partial
        plist.

        Args:
            descriptor: Launch agent descriptor
            output_path: Path where the plist file will be written

        Raises:
            OSError: If the file cannot be written or renamed
        """
        data = PlistGenerator.dumps(descriptor)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, output_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @staticmethod
    def read_plist(path: Path) -> dict[str, Any]:
        """Read a plist file.

        Raises:
            FileNotFoundError: If the plist file doesn't exist
            plistlib.InvalidFileException: If the file is not valid plist
        """
        with open(path, "rb") as f:
            return plistlib.load(f)

    @staticmethod
    def get_launch_agents_dir() -> Path:
        """Get the user's LaunchAgents directory (~/Library/LaunchAgents)."""
        return Path.home() / "Library" / "LaunchAgents"

    @staticmethod
    def get_plist_path(label: str, launch_agents_dir: Path | None = None) -> Path:
        """Get the canonical plist path for a label.

        Args:
            label: Launch agent label (e.g., 'com.m24.tools.indexer')
            launch_agents_dir: Override for the LaunchAgents directory

        Returns:
            Path to the plist file
        """
        base = launch_agents_dir or PlistGenerator.get_launch_agents_dir()
        return base / f"{label}.plist"

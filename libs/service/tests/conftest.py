import plistlib
from pathlib import Path

import pytest

from indexer_service.config import ServiceConfig
from indexer_service.models.launchctl import LaunchctlResult
from indexer_service.process_manager.paths import PathResolver


class FakeLaunchctl:
    """In-memory stand-in for launchctl that tracks loaded plists by label."""

    def __init__(self, fail_load: bool = False, load_stderr: str = "", load_stdout: str = ""):
        self.fail_load = fail_load
        self.load_stderr = load_stderr
        self.load_stdout = load_stdout
        self.loaded: dict[str, Path] = {}
        self.calls: list[tuple[str, str]] = []

    def query(self, label: str) -> LaunchctlResult:
        self.calls.append(("list", label))
        if label in self.loaded:
            out = f'{{\n\t"LastExitStatus" = 0;\n\t"Label" = "{label}";\n\t"PID" = 4242;\n}};'
            return LaunchctlResult(success=True, message=out, stdout=out)
        err = f"Could not find service \"{label}\" in domain for port"
        return LaunchctlResult(success=False, message=err, exit_code=113, stderr=err)

    def register(self, plist_path: Path) -> LaunchctlResult:
        self.calls.append(("load", str(plist_path)))
        if not Path(plist_path).exists():
            err = f"{plist_path}: No such file or directory"
            return LaunchctlResult(success=False, message=err, exit_code=1, stderr=err)
        if self.fail_load:
            return LaunchctlResult(
                success=False,
                message=self.load_stderr or self.load_stdout,
                exit_code=5,
                stdout=self.load_stdout,
                stderr=self.load_stderr,
            )
        with open(plist_path, "rb") as f:
            label = plistlib.load(f)["Label"]
        self.loaded[label] = Path(plist_path)
        return LaunchctlResult(success=True, message="")

    def unregister(self, plist_path: Path) -> LaunchctlResult:
        self.calls.append(("unload", str(plist_path)))
        for label, path in list(self.loaded.items()):
            if path == Path(plist_path):
                del self.loaded[label]
                return LaunchctlResult(success=True, message="")
        err = "Unload failed: 5: Input/output error"
        return LaunchctlResult(success=False, message=err, exit_code=5, stderr=err)


@pytest.fixture
def bundle(tmp_path):
    """A fake installed app bundle with the worker and its binaries."""
    macos_dir = tmp_path / "Applications" / "M24 Tools.app" / "Contents" / "MacOS"
    macos_dir.mkdir(parents=True)
    executable = macos_dir / "M24 Tools"
    executable.write_text("")

    resources = macos_dir.parent / "Resources"
    worker = resources / "app" / "indexer" / "worker" / "main.py"
    worker.parent.mkdir(parents=True)
    worker.write_text("")
    (resources / "app.unpacked" / "bin").mkdir(parents=True)

    return executable


@pytest.fixture
def config(tmp_path):
    return ServiceConfig(
        label="com.m24.test.indexer",
        launch_agents_dir=str(tmp_path / "LaunchAgents"),
        log_dir=str(tmp_path / "Logs"),
        packaged=True,
    )


@pytest.fixture
def resolver(config, bundle):
    return PathResolver(config, executable=str(bundle))


@pytest.fixture
def fake_launchctl():
    return FakeLaunchctl()

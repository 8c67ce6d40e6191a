from dataclasses import dataclass


@dataclass
class LaunchctlResult:
    """Result from a launchctl invocation.

    Attributes:
        success: Whether launchctl exited with status 0
        message: stdout on success, otherwise stderr falling back to stdout
        exit_code: Exit code from launchctl (127 when launchctl is missing)
        stdout: Raw standard output
        stderr: Raw error output
    """

    success: bool
    message: str
    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""

    def diagnostic(self, fallback: str) -> str:
        """Best available explanation of a failed call."""
        return self.stderr or self.stdout or self.message or fallback

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ServiceErrorKind(str, Enum):
    """Why a service verb failed."""
    UNSUPPORTED_CONTEXT = "unsupported_context"
    PATH_RESOLUTION = "path_resolution"
    REGISTRATION_FAILED = "registration_failed"
    RESTART_FAILED = "restart_failed"
    FILE_SYSTEM = "file_system"


@dataclass
class ActionResult:
    """Result from a service verb.

    Attributes:
        success: Whether the verb achieved its outcome
        message: Human-readable message about the result
        error: Failure classification, None on success
        data: Optional additional details (plist path, loaded state, raw output)
    """

    success: bool
    message: str
    error: ServiceErrorKind | None = None
    data: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the ``{"ok": ..., **details}`` shape callers consume.

        Detail keys are snake_case Python names: ``plist_path`` is the
        ``plistPath`` field of the caller-facing result, ``plist_exists``
        and ``last_exit_status`` follow the same rule.
        """
        payload: dict[str, Any] = {"ok": self.success, **(self.data or {})}
        if not self.success:
            payload["error"] = self.message
            if self.error is not None:
                payload["kind"] = self.error.value
        return payload

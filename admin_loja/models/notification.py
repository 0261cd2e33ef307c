"""User-facing notifications produced by the form workflows."""

from dataclasses import dataclass
from enum import Enum


class NotificationKind(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    """Transient message shown to the user (toast)."""

    kind: NotificationKind
    message: str

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls(NotificationKind.SUCCESS, message)

    @classmethod
    def warning(cls, message: str) -> "Notification":
        return cls(NotificationKind.WARNING, message)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls(NotificationKind.ERROR, message)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}

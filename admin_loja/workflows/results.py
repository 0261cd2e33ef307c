"""Outcome of a form submission."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from admin_loja.models import Notification


@dataclass(frozen=True)
class WorkflowResult:
    """What the screen should do after a submission.

    ``redirect_to`` is set when the form should be left, ``field_errors``
    holds inline validation messages and ``failed_uploads`` the names of
    files that could not be uploaded. ``busy`` marks a submission turned
    away because the form was still saving.
    """

    ok: bool
    notification: Optional[Notification] = None
    entity_id: Optional[str] = None
    redirect_to: Optional[str] = None
    field_errors: Dict[str, str] = field(default_factory=dict)
    failed_uploads: Tuple[str, ...] = ()
    busy: bool = False

    @classmethod
    def invalid(cls, field_errors: Dict[str, str]) -> "WorkflowResult":
        return cls(ok=False, field_errors=field_errors)

    @classmethod
    def rejected(cls, message: str) -> "WorkflowResult":
        return cls(ok=False, notification=Notification.warning(message))

    @classmethod
    def busy_submission(cls, message: str) -> "WorkflowResult":
        return cls(ok=False, notification=Notification.warning(message), busy=True)

    @classmethod
    def failed(cls, message: str, entity_id: Optional[str] = None) -> "WorkflowResult":
        return cls(ok=False, notification=Notification.error(message), entity_id=entity_id)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "id": self.entity_id,
            "redirectTo": self.redirect_to,
            "notification": self.notification.to_dict() if self.notification else None,
            "fieldErrors": self.field_errors,
            "failedUploads": list(self.failed_uploads),
            "busy": self.busy,
        }

"""Helpers shared by the page controllers."""

from typing import List, Optional

from fastapi import UploadFile, status
from fastapi.responses import JSONResponse

from admin_loja.api.dependencies import UserSession
from admin_loja.models import NotificationKind
from admin_loja.presentation.uploads import drop_zone, preview_grid
from admin_loja.workflows import IncomingFile, StagingResult, WorkflowResult, stage_files


def result_status(result: WorkflowResult, created: bool = False) -> int:
    """HTTP status for a workflow outcome."""
    if result.ok:
        return status.HTTP_201_CREATED if created else status.HTTP_200_OK
    if result.field_errors:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if result.busy:
        return status.HTTP_409_CONFLICT
    notification = result.notification
    if result.redirect_to and notification is not None and notification.kind == NotificationKind.WARNING:
        return status.HTTP_404_NOT_FOUND
    if notification is not None and notification.kind == NotificationKind.ERROR:
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_400_BAD_REQUEST


def result_response(result: WorkflowResult, created: bool = False) -> JSONResponse:
    return JSONResponse(status_code=result_status(result, created), content=result.to_dict())


async def read_uploads(files: Optional[List[UploadFile]]) -> List[IncomingFile]:
    incoming = []
    for upload in files or []:
        incoming.append(
            IncomingFile(
                filename=upload.filename or "arquivo",
                content_type=upload.content_type or "application/octet-stream",
                data=await upload.read(),
            )
        )
    return incoming


async def stage_uploads(
    session: UserSession, target: str, item_id: Optional[str], files: Optional[List[UploadFile]]
) -> StagingResult:
    """Add uploaded files to the staging area of one form and keep them for later requests."""
    result = stage_files(session.staging_area(target, item_id), await read_uploads(files))
    session.set_staging(target, item_id, result.area)
    return result


async def submission_area(
    session: UserSession, target: str, item_id: Optional[str], files: Optional[List[UploadFile]]
) -> StagingResult:
    """Files staged for a form plus the ones sent with the submit.

    The session is left as it was, so a failed submit can be sent again with
    the same files.
    """
    return stage_files(session.staging_area(target, item_id), await read_uploads(files))


def staging_payload(result: StagingResult) -> dict:
    return {
        "previews": preview_grid(result.area),
        "dropZone": drop_zone(result.area),
        "rejected": [rejection.to_dict() for rejection in result.rejected],
        "messages": result.messages,
    }


def rejected_files_response(result: StagingResult) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=staging_payload(result))

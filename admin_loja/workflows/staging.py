"""Local staging of image files before upload.

Staged files live only in the form state: each gets a local id and a data-URL
preview, independent of any server-side id. The staging area is immutable;
every operation returns a new one.
"""

import base64
import uuid
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

from admin_loja.config import UploadConfig

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")
MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024
MAX_PRODUCT_IMAGES = 5
MAX_BANNER_IMAGES = 1


@dataclass(frozen=True)
class IncomingFile:
    """A file picked by the user, not yet validated."""

    filename: str
    content_type: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class StagedFile:
    """An accepted file waiting for upload."""

    local_id: str
    filename: str
    content_type: str
    data: bytes = field(repr=False)
    preview: str = field(repr=False)  # data: URL

    @property
    def size(self) -> int:
        return len(self.data)

    def to_dict(self) -> dict:
        return {
            "localId": self.local_id,
            "filename": self.filename,
            "contentType": self.content_type,
            "size": self.size,
            "preview": self.preview,
        }


@dataclass(frozen=True)
class Rejection:
    """A file that was not staged and why."""

    filename: str
    reason: str

    def to_dict(self) -> dict:
        return {"filename": self.filename, "reason": self.reason}


@dataclass(frozen=True)
class StagingArea:
    """Ordered set of staged files with its acceptance rules."""

    files: Tuple[StagedFile, ...] = ()
    max_files: int = MAX_PRODUCT_IMAGES
    max_size_bytes: int = MAX_IMAGE_SIZE_BYTES
    allowed_types: Tuple[str, ...] = ALLOWED_IMAGE_TYPES

    @classmethod
    def for_products(cls, config: Optional[UploadConfig] = None) -> "StagingArea":
        if config is None:
            return cls(max_files=MAX_PRODUCT_IMAGES)
        return cls(
            max_files=config.max_product_images,
            max_size_bytes=config.max_file_size_bytes,
            allowed_types=config.allowed_types,
        )

    @classmethod
    def for_banners(cls, config: Optional[UploadConfig] = None) -> "StagingArea":
        if config is None:
            return cls(max_files=MAX_BANNER_IMAGES)
        return cls(
            max_files=config.max_banner_images,
            max_size_bytes=config.max_file_size_bytes,
            allowed_types=config.allowed_types,
        )

    @property
    def is_empty(self) -> bool:
        return not self.files

    @property
    def remaining(self) -> int:
        return max(self.max_files - len(self.files), 0)

    @property
    def previews(self) -> List[str]:
        return [staged.preview for staged in self.files]


@dataclass(frozen=True)
class StagingResult:
    area: StagingArea
    rejected: Tuple[Rejection, ...] = ()

    @property
    def messages(self) -> List[str]:
        return [f"{rejection.filename}: {rejection.reason}" for rejection in self.rejected]


def make_preview(content_type: str, data: bytes) -> str:
    """Build a data: URL so the image can be shown before upload."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def _format_size(size: int) -> str:
    return f"{size / (1024 * 1024):.0f} MB"


def check_file(area: StagingArea, incoming: IncomingFile) -> Optional[str]:
    """Return the rejection reason for a file, or None if it is acceptable."""
    if incoming.content_type not in area.allowed_types:
        return "Tipo de arquivo não permitido. Use JPG, PNG, WEBP ou GIF."
    if not incoming.data:
        return "Arquivo vazio."
    if len(incoming.data) > area.max_size_bytes:
        return f"Arquivo maior que o limite de {_format_size(area.max_size_bytes)}."
    return None


def stage_files(area: StagingArea, incoming: Iterable[IncomingFile]) -> StagingResult:
    """
    Validate and stage files in the order they were picked.

    Files within the remaining quota are accepted even when later ones are
    rejected; already staged files are never touched.

    Args:
        area: Current staging area.
        incoming: Files picked by the user.

    Returns:
        StagingResult with the new area and the rejected files.
    """
    accepted: List[StagedFile] = []
    rejected: List[Rejection] = []

    for candidate in incoming:
        reason = check_file(area, candidate)
        if reason is None and len(area.files) + len(accepted) >= area.max_files:
            reason = (
                f"Limite de {area.max_files} imagem(ns) atingido. "
                f"Remova uma imagem para adicionar outra."
            )

        if reason is not None:
            rejected.append(Rejection(candidate.filename, reason))
            continue

        accepted.append(
            StagedFile(
                local_id=uuid.uuid4().hex,
                filename=candidate.filename,
                content_type=candidate.content_type,
                data=candidate.data,
                preview=make_preview(candidate.content_type, candidate.data),
            )
        )

    return StagingResult(
        area=replace(area, files=area.files + tuple(accepted)),
        rejected=tuple(rejected),
    )


def remove_staged(area: StagingArea, local_id: str) -> StagingArea:
    """Drop a staged file and its preview. Unknown ids leave the area unchanged."""
    return replace(area, files=tuple(staged for staged in area.files if staged.local_id != local_id))


def clear_staging(area: StagingArea) -> StagingArea:
    return replace(area, files=())

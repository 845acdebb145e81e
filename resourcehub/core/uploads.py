"""
Upload validation and object key helpers.

Checks filenames and sizes per upload kind and builds collision-free
object keys of the form {kind}/{owner_id}/{unique_id}-{safe_name}.{ext}.

Dependencies: None
System role: Presigned upload request validation
"""

import enum
import uuid

from resourcehub.core.exceptions import ValidationError


class UploadKind(str, enum.Enum):
    """Storage areas a client may upload into."""

    RESOURCE = "resources"
    THUMBNAIL = "thumbnails"
    AVATAR = "avatars"


IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}

RESOURCE_EXTENSIONS = IMAGE_EXTENSIONS | {
    "pdf", "epub", "txt", "csv", "md",
    "doc", "docx", "ppt", "pptx", "xls", "xlsx",
    "zip", "rar", "7z", "tar", "gz",
    "mp3", "wav", "flac", "ogg", "m4a",
    "mp4", "mov", "avi", "mkv", "webm",
    "psd", "ai", "eps", "svg", "fig", "sketch", "xd",
    "ttf", "otf", "json",
}

ALLOWED_EXTENSIONS: dict[UploadKind, set[str]] = {
    UploadKind.RESOURCE: RESOURCE_EXTENSIONS,
    UploadKind.THUMBNAIL: IMAGE_EXTENSIONS,
    UploadKind.AVATAR: IMAGE_EXTENSIONS,
}


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot, or "" when absent."""
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def validate_filename(kind: UploadKind, filename: str) -> None:
    """
    Validate filename for security and allowed extensions.

    Args:
        kind: Upload kind deciding the allowed extensions
        filename: Original filename from the client

    Raises:
        ValidationError: If filename is invalid or not allowed
    """
    if not filename or len(filename) > 255:
        raise ValidationError("Invalid filename length", field="filename")

    if ".." in filename or "/" in filename or "\\" in filename:
        raise ValidationError("Invalid filename: path traversal detected", field="filename")

    ext = file_extension(filename)
    if not ext:
        raise ValidationError("File must have an extension", field="filename")

    allowed = ALLOWED_EXTENSIONS[kind]
    if ext not in allowed:
        raise ValidationError(
            f"File type '.{ext}' not allowed for {kind.value}. "
            f"Allowed: {', '.join(sorted(allowed))}",
            field="filename",
        )


def validate_size(kind: UploadKind, size: int, max_resource_size: int, max_image_size: int) -> None:
    """
    Check a declared file size against the kind's limit.

    Raises:
        ValidationError: If size is not positive or above the limit
    """
    limit = max_resource_size if kind == UploadKind.RESOURCE else max_image_size
    if size <= 0:
        raise ValidationError("File size must be positive", field="file_size")
    if size > limit:
        raise ValidationError(
            f"File too large: {size} bytes (max {limit} bytes)",
            field="file_size",
        )


def generate_object_key(kind: UploadKind, owner_id: str, filename: str) -> str:
    """
    Generate a unique object key for an upload.

    Format: {kind}/{owner_id}/{unique_id}-{sanitized_name}.{ext}

    Args:
        kind: Upload kind (first path segment)
        owner_id: Uploading user's id
        filename: Original filename

    Returns:
        str: Safe object key
    """
    ext = file_extension(filename)
    suffix = f".{ext}" if ext else ""

    base_name = filename.rsplit(".", 1)[0] if "." in filename else filename
    safe_name = "".join(c for c in base_name if c.isalnum() or c in "-_")
    if not safe_name:
        safe_name = "file"

    unique_id = str(uuid.uuid4())[:8]
    return f"{kind.value}/{owner_id}/{unique_id}-{safe_name}{suffix}"


def key_belongs_to(key: str, kind: UploadKind, owner_id: str) -> bool:
    """True when key was issued for this kind and owner."""
    return key.startswith(f"{kind.value}/{owner_id}/")

"""Upload checks for captured images - size and magic bytes only."""


class ImageValidationError(Exception):
    """Raised when an uploaded image cannot be sent for analysis."""


def detect_mime_type(data: bytes) -> str | None:
    """Return image/jpeg, image/png or image/webp from magic bytes, else None."""
    if data[:2] == b"\xff\xd8":
        return "image/jpeg"
    if data[:4] == b"\x89PNG":
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def validate_image(data: bytes, max_bytes: int) -> str:
    """Check size and format; returns the detected MIME type."""
    if not data:
        raise ImageValidationError("Image file is required")
    if len(data) > max_bytes:
        raise ImageValidationError(
            f"Image file too large. Maximum size is {max_bytes // (1024 * 1024)}MB."
        )
    mime_type = detect_mime_type(data)
    if mime_type is None:
        raise ImageValidationError(
            "Unsupported image format. Please use JPEG, PNG, or WebP images."
        )
    return mime_type

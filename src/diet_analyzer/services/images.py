"""Image encoding helpers for provider requests."""

import base64

ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})


def to_base64(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("utf-8")


def to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    resolved = mime_type or detect_mime_type(image_bytes)
    return f"data:{resolved};base64,{to_base64(image_bytes)}"


def detect_mime_type(image_bytes: bytes) -> str | None:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return None


def resolve_mime_type(declared: str | None, image_bytes: bytes) -> str | None:
    """Prefer the declared type, sniffing bytes when it is missing or generic."""
    if declared and declared != "application/octet-stream":
        return declared.split(";")[0].strip().lower()
    return detect_mime_type(image_bytes)

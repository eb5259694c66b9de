"""Trade screenshot attachments."""

import base64
import mimetypes
from pathlib import Path


class AttachmentTooLargeError(ValueError):
    """Raised when an image exceeds the configured size limit."""


def load_attachment(ref: str, max_bytes: int) -> str:
    """Turn an image reference into the value stored on a trade.

    Args:
        ref: An http(s) URL (stored as-is) or a local image path.
        max_bytes: Largest file accepted, in bytes.

    Returns:
        The URL, or a ``data:`` URI with the file contents.

    Raises:
        AttachmentTooLargeError: If the file is larger than max_bytes.
        OSError: If the file cannot be read.
    """
    if ref.startswith(("http://", "https://", "data:")):
        return ref

    path = Path(ref).expanduser()
    size = path.stat().st_size
    if size > max_bytes:
        raise AttachmentTooLargeError(
            f"{path.name} is {size / 1_000_000:.1f} MB, limit is {max_bytes / 1_000_000:.1f} MB"
        )

    mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"

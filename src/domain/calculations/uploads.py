"""Report attachment rules"""

from typing import Optional

ALLOWED_FILE_TYPES = {
    "application/pdf": ".pdf",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


def validate_report_file(content_type: str, size: int, max_size: int = MAX_FILE_SIZE) -> Optional[str]:
    """Error message for a rejected attachment, None when it is acceptable"""
    if content_type not in ALLOWED_FILE_TYPES:
        return "File type not allowed. Please upload PDF, JPEG, PNG, GIF, or WebP files."
    if size > max_size:
        return f"File size too large. Maximum size is {max_size // (1024 * 1024)}MB."
    return None

"""
Status indicators for CLI output.
"""

STATUS = {
    "SUCCESS": "✅",
    "ERROR": "❌",
    "WARNING": "⚠️",
    "INFO": "ℹ️",
    "WORKING": "⏳",
}


def format_status(message: str, status: str) -> str:
    """Prefix a message with the glyph for ``status`` (e.g. "SUCCESS")."""
    return f"{STATUS[status]} {message}"

"""Formatting of service reports for message sharing.

Only the text and link are built here; opening the link is left to the
caller.
"""

from urllib.parse import quote

from worship_log.db.models import format_display_date

SHARE_URL = "https://wa.me/?text="


def format_share_text(date: str, songs: list[str], description: str = "", title: str = "") -> str:
    """Format a service report as a message.

    Args:
        date: Service date as YYYY-MM-DD
        songs: Songs in performance order
        description: Period label (optional)
        title: Congregation name (optional)

    Returns:
        Message text with a numbered song list
    """
    heading = f"Relatório {title}" if title else "Relatório de Culto"
    lines = [f"*{heading} - {format_display_date(date)}*", ""]

    if description:
        lines.extend([f"*Culto:* {description}", ""])

    lines.append("*Louvores:*")
    lines.extend(f"{i}. {song}" for i, song in enumerate(songs, 1))

    return "\n".join(lines) + "\n"


def share_url(text: str) -> str:
    """Build the outbound share link for a message."""
    return SHARE_URL + quote(text, safe="!~*'()")

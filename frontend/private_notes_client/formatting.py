"""
Private Notes Client — Display Formatting
==========================================

Relative timestamps shown in the note list and the editor header.
Both helpers take `now` explicitly; values are rendered in their own timezone.
"""

from datetime import datetime


def format_last_saved(last_saved: datetime, now: datetime) -> str:
    """
    "just now" under 10 seconds, "Ns ago" under a minute, "Nm ago" under an
    hour, otherwise the clock time ("3:07 PM").
    """
    seconds = max(0, int((now - last_saved).total_seconds()))

    if seconds < 10:
        return "just now"
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"

    hour = last_saved.hour % 12 or 12
    suffix = "AM" if last_saved.hour < 12 else "PM"
    return f"{hour}:{last_saved.minute:02d} {suffix}"


def format_note_date(created_at: datetime, now: datetime) -> str:
    """
    "Today", "Yesterday", "N days ago" within a week, otherwise "Jan 5, 2026".

    Days are whole 24-hour periods elapsed, not calendar days.
    """
    days = max(0, int((now - created_at).total_seconds() // 86400))

    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    return f"{created_at:%b} {created_at.day}, {created_at.year}"

from datetime import datetime


def format_when(dt: datetime) -> str:
    """e.g. 'Fri, 01 Mar 2024 2:00 PM'"""
    hour = dt.hour % 12 or 12
    return f"{dt:%a, %d %b %Y} {hour}:{dt:%M %p}"


def format_clock(dt: datetime) -> str:
    """e.g. '09:00 AM'"""
    return dt.strftime("%I:%M %p")

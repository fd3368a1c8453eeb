"""
Dates Module - Lenient date parsing and experience duration formatting
"""

from datetime import datetime, timezone


# Human-entered forms, tried in order after ISO-8601
DATE_TEXT_FORMATS = [
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m',
    '%b %Y',
    '%B %Y',
    '%b %d, %Y',
    '%B %d, %Y',
    '%d %b %Y',
    '%d %B %Y',
    '%m/%Y',
    '%m/%d/%Y',
    '%Y',
]


def parse_date_text(text):
    """Parse a date string, returning a naive UTC datetime or None.

    ISO-8601 strings (with an optional trailing ``Z``) are tried first,
    then the human forms in ``DATE_TEXT_FORMATS``. Month-only forms resolve
    to the first day of that month.
    """
    if isinstance(text, datetime):
        return _to_naive_utc(text)
    if not isinstance(text, str):
        return None

    value = ' '.join(text.split())
    if not value:
        return None

    iso_value = value[:-1] + '+00:00' if value.endswith(('Z', 'z')) else value
    try:
        return _to_naive_utc(datetime.fromisoformat(iso_value))
    except (ValueError, OverflowError):
        pass

    for fmt in DATE_TEXT_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except (ValueError, OverflowError):
            continue
    return None


def _to_naive_utc(value):
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def months_between(start, end):
    """Whole calendar months from start's month to end's month, floored at 0"""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return max(0, months)


def format_month_year(value):
    return value.strftime('%b %Y') if value else ''


def human_duration(start, end):
    months = months_between(start, end)
    years, months = divmod(months, 12)
    if years > 0 and months > 0:
        return f"{years} yr {months} mos"
    if years > 0:
        return f"{years} yr{'s' if years > 1 else ''}"
    return f"{months} mos"


def build_duration(start, end=None, current=False, now=None):
    """Display string like "Aug 2022 – Present · 2 yr 3 mos"."""
    ongoing = current or end is None
    if ongoing:
        end = now or datetime.utcnow()
    label = 'Present' if ongoing else format_month_year(end)
    return f"{format_month_year(start)} – {label} · {human_duration(start, end)}"


def isoformat_utc(value):
    """Serialize a naive UTC datetime as ISO-8601 with a Z suffix"""
    if value is None:
        return None
    return _to_naive_utc(value).isoformat(timespec='milliseconds') + 'Z'


__all__ = [
    'parse_date_text',
    'months_between',
    'format_month_year',
    'human_duration',
    'build_duration',
    'isoformat_utc'
]

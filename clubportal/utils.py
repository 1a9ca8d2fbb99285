# clubportal/utils.py

import uuid
from datetime import datetime, timezone


def utcnow():
    """Naive UTC timestamp, the form the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_document_id():
    return uuid.uuid4().hex


def format_date(value, fmt='%b %d, %Y'):
    """
    Formats a datetime or an ISO date string (YYYY-MM-DD) for display.
    Unparseable strings are returned unchanged.
    """
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime(fmt)


def serialize_document(document):
    serialized = {}
    for key, value in document.items():
        if isinstance(value, datetime):
            serialized[key] = value.isoformat()
        else:
            serialized[key] = value
    return serialized

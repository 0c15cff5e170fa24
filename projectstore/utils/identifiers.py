from bson import ObjectId
from typing import Optional


def generate_id() -> str:
    """
    Return a new opaque record id.

    Ids are ObjectId hex strings, so ids made by one process sort in the
    order they were made. Callers must still treat them as opaque.
    """
    return str(ObjectId())


def normalize_label(label: Optional[str]) -> str:
    """Trim surrounding whitespace from a label. ``None`` becomes ``""``."""
    if label is None:
        return ""
    return label.strip()

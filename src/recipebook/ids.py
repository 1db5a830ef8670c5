"""Opaque id generation for offline list items."""

import uuid


def make_id(prefix: str = "id") -> str:
    """Return a new unique id such as ``item_3f2c...``."""
    return f"{prefix}_{uuid.uuid4().hex}"

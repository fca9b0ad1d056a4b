"""Identifier generation for records without an explicit id."""

import uuid


def generate_id() -> str:
    """Return a new random UUID4 as a string."""
    return str(uuid.uuid4())

"""Trade tag domain model."""

from dataclasses import dataclass


@dataclass
class Tag:
    """A user-defined label attached to trades (an emotion or a reason)."""

    tag_id: str
    name: str
    color: str

"""Tag service for emotion and reason tags attached to trades."""

import logging
import uuid

from turtletrace.core.exceptions import NotFoundError, ValidationError
from turtletrace.domain.models import Tag, TagKind
from turtletrace.repositories.protocols import TagRepository

logger = logging.getLogger(__name__)

TAG_COLORS = [
    "gray",
    "red",
    "orange",
    "amber",
    "green",
    "emerald",
    "teal",
    "cyan",
    "blue",
    "indigo",
    "violet",
    "purple",
    "pink",
    "rose",
    "slate",
]

DEFAULT_TAGS: dict[TagKind, list[tuple[str, str]]] = {
    TagKind.EMOTION: [
        ("冲动追高", "red"),
        ("恐慌割肉", "green"),
        ("理性建仓", "blue"),
        ("波段操作", "purple"),
        ("价值投资", "amber"),
        ("止损离场", "orange"),
        ("止盈落袋", "emerald"),
        ("抄底博反弹", "cyan"),
    ],
    TagKind.REASON: [
        ("财报利好", "blue"),
        ("政策利好", "purple"),
        ("技术突破", "green"),
        ("板块轮动", "amber"),
        ("分红除权", "cyan"),
        ("止损", "red"),
        ("止盈", "emerald"),
        ("资金需求", "orange"),
        ("市场恐慌", "slate"),
        ("市场过热", "rose"),
    ],
}


def default_tags(kind: TagKind) -> list[Tag]:
    return [
        Tag(tag_id=str(index), name=name, color=color)
        for index, (name, color) in enumerate(DEFAULT_TAGS[kind], start=1)
    ]


class TagService:
    """Service for the two tag vocabularies; defaults apply until first edit."""

    def __init__(self, tag_repo: TagRepository):
        self._tag_repo = tag_repo

    def list_tags(self, kind: TagKind) -> list[Tag]:
        tags = self._tag_repo.load(kind)
        return default_tags(kind) if tags is None else tags

    def add_tag(self, kind: TagKind, name: str) -> Tag:
        """Append a tag, cycling through the color palette."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Tag name is required")
        tags = self.list_tags(kind)
        if any(t.name == name for t in tags):
            raise ValidationError(f"Tag '{name}' already exists")

        tag = Tag(
            tag_id=uuid.uuid4().hex,
            name=name,
            color=TAG_COLORS[len(tags) % len(TAG_COLORS)],
        )
        self._tag_repo.save(kind, [*tags, tag])
        logger.info("Added %s tag %s", kind.value, name)
        return tag

    def delete_tag(self, kind: TagKind, tag_id: str) -> None:
        tags = self.list_tags(kind)
        remaining = [t for t in tags if t.tag_id != tag_id]
        if len(remaining) == len(tags):
            raise NotFoundError("Tag", tag_id)
        self._tag_repo.save(kind, remaining)

    def get_tag(self, kind: TagKind, tag_id: str) -> Tag:
        for tag in self.list_tags(kind):
            if tag.tag_id == tag_id:
                return tag
        raise NotFoundError("Tag", tag_id)

"""Global tag registry with get-or-create semantics."""

import logging
from typing import Iterable, List

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.tag import Tag

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

# tags.name is String(100)
TAG_MAX_LENGTH = 100


class TagService:
    """Service for tag resolution and listing."""

    @staticmethod
    def _lookup(db: Session, normalized_name: str):
        return db.query(Tag.id).filter(Tag.name == normalized_name).scalar()

    @staticmethod
    def resolve_or_create(db: Session, name: str) -> int:
        """
        Return the id of the tag with this name, creating it if absent.

        The insert is an upsert against the unique name constraint, so two
        concurrent callers with the same name end up sharing one row.
        Does not commit; the caller owns the transaction.

        Args:
            db: Database session
            name: Raw tag name (trimmed and lowercased before lookup)

        Returns:
            Tag ID
        """
        normalized_name = Tag.normalize_name(name)
        if not normalized_name:
            raise ValueError("Tag name must not be blank")
        if len(normalized_name) > TAG_MAX_LENGTH:
            raise ValueError(f"Tag name must be at most {TAG_MAX_LENGTH} characters")

        insert = _UPSERT_DIALECTS.get(db.get_bind().dialect.name)
        if insert is not None:
            db.execute(
                insert(Tag)
                .values(name=normalized_name)
                .on_conflict_do_nothing(index_elements=["name"])
            )
            return TagService._lookup(db, normalized_name)

        # Other backends: savepoint insert, re-read if another request won the race
        tag_id = TagService._lookup(db, normalized_name)
        if tag_id is not None:
            return tag_id
        try:
            with db.begin_nested():
                tag = Tag(name=normalized_name)
                db.add(tag)
            return tag.id
        except IntegrityError:
            logger.info("Tag %r created concurrently, reusing it", normalized_name)
            return TagService._lookup(db, normalized_name)

    @staticmethod
    def resolve_many(db: Session, names: Iterable[str]) -> List[int]:
        """Resolve a list of tag names, dropping blanks and duplicates (first seen wins)."""
        seen = set()
        tag_ids = []
        for name in names or []:
            normalized_name = Tag.normalize_name(name)
            if not normalized_name or normalized_name in seen:
                continue
            seen.add(normalized_name)
            tag_ids.append(TagService.resolve_or_create(db, normalized_name))
        return tag_ids

    @staticmethod
    def list_all(db: Session) -> List[Tag]:
        """All tags, sorted by name ascending."""
        return db.query(Tag).order_by(Tag.name.asc()).all()


# Singleton instance
tag_service = TagService()

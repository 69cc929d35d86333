from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from app.database import Base


class Tag(Base):
    """Global tag registry. Names are unique and lowercase."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    recipe_tags = relationship("RecipeTag", back_populates="tag")

    @staticmethod
    def normalize_name(name: str) -> str:
        """Normalize tag name for consistent matching."""
        return (name or "").strip().lower()

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    Index,
    CheckConstraint,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Recipe(Base):
    """A recipe owned by exactly one user."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String(255), nullable=False)
    description = Column(Text)
    servings = Column(Integer, nullable=False)
    prep_time = Column(Integer)  # Minutes
    cook_time = Column(Integer)  # Minutes
    instructions = Column(Text, nullable=False)
    # Set client-side so newest-first ordering keeps sub-second resolution
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="recipes")
    ingredients = relationship(
        "Ingredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Ingredient.position",
    )
    recipe_tags = relationship(
        "RecipeTag",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tags = relationship(
        "Tag", secondary="recipe_tags", viewonly=True, order_by="Tag.name"
    )

    __table_args__ = (
        CheckConstraint("servings > 0", name="ck_recipes_servings_positive"),
        CheckConstraint(
            "prep_time IS NULL OR prep_time >= 0", name="ck_recipes_prep_time"
        ),
        CheckConstraint(
            "cook_time IS NULL OR cook_time >= 0", name="ck_recipes_cook_time"
        ),
        Index("idx_recipes_user_id", "user_id"),
        Index("idx_recipes_created_at", "created_at"),
    )

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]

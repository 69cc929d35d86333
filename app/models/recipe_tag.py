from sqlalchemy import Column, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.database import Base


class RecipeTag(Base):
    """Junction table linking recipes to tags."""

    __tablename__ = "recipe_tags"

    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id = Column(Integer, ForeignKey("tags.id"), primary_key=True)

    # Relationships
    recipe = relationship("Recipe", back_populates="recipe_tags")
    tag = relationship("Tag", back_populates="recipe_tags")

    __table_args__ = (
        Index("idx_recipe_tags_tag_id", "tag_id"),
    )

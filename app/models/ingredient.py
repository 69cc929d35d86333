from sqlalchemy import Column, Integer, String, Numeric, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.database import Base


class Ingredient(Base):
    """One structured ingredient line, owned by a single recipe."""

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False, default=0)  # Input order within the recipe
    name = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 3, asdecimal=False), nullable=False)
    unit = Column(String(50), nullable=False)
    notes = Column(Text)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")

    __table_args__ = (
        Index("idx_ingredients_recipe_id", "recipe_id"),
    )

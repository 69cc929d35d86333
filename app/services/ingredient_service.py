"""Per-recipe ingredient set: ordered insert and destructive full replace."""

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from app.models.ingredient import Ingredient


class IngredientLine(BaseModel):
    """One ingredient line as accepted for storage.

    Bounds match the ingredients columns: name String(255), unit String(50),
    amount Numeric(10, 3).
    """

    name: str = Field(min_length=1, max_length=255)
    amount: float = Field(gt=0, le=9_999_999.999, allow_inf_nan=False)
    unit: str = Field(min_length=1, max_length=50)
    notes: Optional[str] = None

    @field_validator("name", "unit", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class IngredientService:
    """Service for a recipe's ingredient set. Never commits."""

    @staticmethod
    def add_all(
        db: Session, recipe_id: int, lines: Sequence[IngredientLine]
    ) -> List[Ingredient]:
        """
        Persist ingredient lines for a recipe in input order.

        Args:
            db: Database session
            recipe_id: Owning recipe ID
            lines: Ingredient lines, in the order they should be shown

        Returns:
            Created Ingredient objects (flushed, not committed)
        """
        ingredients = [
            Ingredient(
                recipe_id=recipe_id,
                position=position,
                name=line.name,
                amount=line.amount,
                unit=line.unit,
                notes=line.notes,
            )
            for position, line in enumerate(lines or [])
        ]
        db.add_all(ingredients)
        db.flush()
        return ingredients

    @staticmethod
    def delete_all(db: Session, recipe_id: int) -> int:
        """Delete every ingredient of a recipe. Returns count deleted."""
        existing = db.query(Ingredient).filter(Ingredient.recipe_id == recipe_id).all()
        for ingredient in existing:
            db.delete(ingredient)
        db.flush()
        return len(existing)

    @staticmethod
    def replace_all(
        db: Session, recipe_id: int, lines: Sequence[IngredientLine]
    ) -> List[Ingredient]:
        """Delete the prior set, then insert the new one. Ingredient ids are not kept."""
        IngredientService.delete_all(db, recipe_id)
        return IngredientService.add_all(db, recipe_id, lines)


# Singleton instance
ingredient_service = IngredientService()

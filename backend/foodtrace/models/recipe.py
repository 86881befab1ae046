"""
Recipe Models
Bill of ingredients: Recipe <-> Ingredient
"""

from sqlalchemy import Column, Integer, String, Date, Text, ForeignKey
from sqlalchemy.orm import relationship

from foodtrace.core.database import Base


class Recipe(Base):
    """Recipe model"""
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    lotcode = Column(String, nullable=False)
    name = Column(String, nullable=False)
    date_made = Column(Date, nullable=False)
    org_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Relationships
    organization = relationship("Organization")
    # Link rows are written through the traceability graph and removed by ON DELETE CASCADE
    ingredient_links = relationship("RecipeIngredient", viewonly=True, order_by="RecipeIngredient.ingredient_id")

    def __repr__(self):
        return f"<Recipe(id={self.id}, lotcode='{self.lotcode}', name='{self.name}')>"

    @property
    def ingredient_ids(self):
        return [link.ingredient_id for link in self.ingredient_links]


class RecipeIngredient(Base):
    """
    Recipe-Ingredient link
    Owned jointly by both endpoints; removed when either is deleted
    """
    __tablename__ = "recipe_ingredients"

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True, index=True)

    # Relationships
    recipe = relationship("Recipe", viewonly=True)
    ingredient = relationship("Ingredient", viewonly=True)

    def __repr__(self):
        return f"<RecipeIngredient(recipe_id={self.recipe_id}, ingredient_id={self.ingredient_id})>"

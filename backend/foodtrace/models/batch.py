"""
Production Batch Models
A batch is one execution of a recipe producing a lot-coded output
"""

from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from foodtrace.core.database import Base


class Batch(Base):
    """
    Batch model
    batch_lot_code identifies the produced lot for downstream trace
    """
    __tablename__ = "batches"

    id = Column(Integer, primary_key=True)
    org_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    employee = Column(String, nullable=False)
    recipe_lotcode = Column(String, nullable=False)
    batch_lot_code = Column(String, nullable=False, index=True)
    date_made = Column(Date, nullable=False)
    amount_made = Column(String, nullable=False)

    # Relationships
    organization = relationship("Organization")
    ingredient_links = relationship("BatchIngredient", viewonly=True, order_by="BatchIngredient.ingredient_id")

    def __repr__(self):
        return f"<Batch(id={self.id}, batch_lot_code='{self.batch_lot_code}')>"

    @property
    def ingredients(self):
        return list(self.ingredient_links)


class BatchIngredient(Base):
    """
    Batch-Ingredient link with the quantity consumed
    """
    __tablename__ = "batch_ingredients"

    batch_id = Column(Integer, ForeignKey("batches.id", ondelete="CASCADE"), primary_key=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True, index=True)
    amount = Column(Float, nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="check_batch_ingredient_amount_positive"),
    )

    # Relationships
    batch = relationship("Batch", viewonly=True)
    ingredient = relationship("Ingredient", viewonly=True)

    def __repr__(self):
        return f"<BatchIngredient(batch_id={self.batch_id}, ingredient_id={self.ingredient_id}, amount={self.amount})>"

# backend/modules/sweets/services/sweet_service.py

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from core.auth import current_identity
from core.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    NotFoundError,
    ValidationError,
)
from ..models.sweet_models import Sweet

logger = logging.getLogger(__name__)

PRICE_STEP = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")  # Numeric(10, 2)
MAX_STOCK = 2**31 - 1  # Integer column
UPDATABLE_FIELDS = ("name", "category", "price", "quantity", "description", "image_url")


class SweetService:
    """Catalog queries and stock mutations for sweets.

    Purchase and restock are a plain read-check-write on the request's
    session. There is no row lock or conditional update, so two concurrent
    purchases of the same sweet can both pass the stock check.
    """

    def __init__(self, db: Session):
        self.db = db

    # Queries
    def list_sweets(self) -> List[Sweet]:
        """All sweets, newest first"""
        return self.db.query(Sweet).order_by(desc(Sweet.created_at)).all()

    def get_sweet(self, sweet_id: UUID) -> Optional[Sweet]:
        return self.db.query(Sweet).filter(Sweet.id == sweet_id).first()

    def get_sweet_or_404(self, sweet_id: UUID) -> Sweet:
        sweet = self.get_sweet(sweet_id)
        if not sweet:
            raise NotFoundError("Sweet not found")
        return sweet

    def search_sweets(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
    ) -> List[Sweet]:
        """
        Filter sweets; every supplied filter must match.

        Args:
            name: case-insensitive substring of the name
            category: case-insensitive exact category
            min_price: inclusive lower price bound
            max_price: inclusive upper price bound
        """
        query = self.db.query(Sweet)

        if name:
            query = query.filter(Sweet.name.ilike(f"%{name}%"))

        if category:
            query = query.filter(func.lower(Sweet.category) == category.lower())

        if min_price is not None:
            query = query.filter(Sweet.price >= min_price)

        if max_price is not None:
            query = query.filter(Sweet.price <= max_price)

        return query.order_by(desc(Sweet.created_at)).all()

    # Mutations
    def create_sweet(self, item_data: Dict[str, Any]) -> Sweet:
        """Create a sweet after checking required fields and non-negativity"""
        name = item_data.get("name")
        category = item_data.get("category")
        price = item_data.get("price")
        quantity = item_data.get("quantity")

        if _is_blank(name) or _is_blank(category) or price is None or quantity is None:
            raise ValidationError("Name, category, price, and quantity are required")

        sweet = Sweet(
            name=name.strip(),
            category=category.strip(),
            price=_validate_price(price),
            quantity=_validate_stock(quantity),
            description=item_data.get("description"),
            image_url=item_data.get("image_url"),
        )

        self.db.add(sweet)
        self.db.commit()
        self.db.refresh(sweet)

        logger.info(f"Sweet {sweet.id} '{sweet.name}' created by {_actor()}")
        return sweet

    def update_sweet(self, sweet_id: UUID, update_data: Dict[str, Any]) -> Sweet:
        """Apply a partial update; fields not supplied keep their values"""
        sweet = self.get_sweet_or_404(sweet_id)

        changes: Dict[str, Any] = {}
        for key, value in update_data.items():
            if key not in UPDATABLE_FIELDS:
                continue
            if key in ("name", "category"):
                if _is_blank(value):
                    raise ValidationError(f"{key.capitalize()} cannot be empty")
                value = value.strip()
            elif key == "price":
                value = _validate_price(value)
            elif key == "quantity":
                value = _validate_stock(value)
            changes[key] = value

        for key, value in changes.items():
            setattr(sweet, key, value)

        self.db.commit()
        self.db.refresh(sweet)

        logger.info(
            f"Sweet {sweet.id} updated by {_actor()}: {', '.join(changes) or 'no changes'}"
        )
        return sweet

    def delete_sweet(self, sweet_id: UUID) -> None:
        sweet = self.get_sweet_or_404(sweet_id)
        self.db.delete(sweet)
        self.db.commit()
        logger.info(f"Sweet {sweet_id} deleted by {_actor()}")

    def purchase(self, sweet_id: UUID, amount: Any) -> Sweet:
        """Decrease stock by ``amount``; the stock never goes negative"""
        amount = _validate_amount(amount, "Purchase")
        sweet = self.get_sweet_or_404(sweet_id)

        if sweet.quantity < amount:
            logger.info(
                f"Purchase of {amount} x {sweet.id} rejected, only {sweet.quantity} in stock"
            )
            raise InsufficientStockError()

        sweet.quantity = sweet.quantity - amount
        self.db.commit()
        self.db.refresh(sweet)

        logger.info(f"{_actor()} purchased {amount} x {sweet.id}, {sweet.quantity} left")
        return sweet

    def restock(self, sweet_id: UUID, amount: Any) -> Sweet:
        """Increase stock by ``amount``, up to ``MAX_STOCK`` in total"""
        amount = _validate_amount(amount, "Restock")
        sweet = self.get_sweet_or_404(sweet_id)

        if sweet.quantity + amount > MAX_STOCK:
            logger.info(
                f"Restock of {amount} x {sweet.id} rejected, {sweet.quantity} already in stock"
            )
            raise InvalidQuantityError(f"Stock cannot exceed {MAX_STOCK}")

        sweet.quantity = sweet.quantity + amount
        self.db.commit()
        self.db.refresh(sweet)

        logger.info(f"{_actor()} restocked {amount} x {sweet.id}, now {sweet.quantity}")
        return sweet


def _actor() -> str:
    identity = current_identity()
    return identity.email if identity else "system"


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_price(value: Any) -> Decimal:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("Price must be a non-negative number")
    if isinstance(value, bool) or not price.is_finite() or price < 0:
        raise ValidationError("Price must be a non-negative number")
    if price > MAX_PRICE:
        raise ValidationError(f"Price cannot exceed {MAX_PRICE}")
    return price.quantize(PRICE_STEP, rounding=ROUND_HALF_UP)


def _validate_stock(value: Any) -> int:
    if not _is_integer(value) or value < 0:
        raise ValidationError("Quantity must be a non-negative integer")
    if value > MAX_STOCK:
        raise ValidationError(f"Quantity cannot exceed {MAX_STOCK}")
    return value


def _validate_amount(value: Any, operation: str) -> int:
    if not _is_integer(value) or value <= 0:
        raise InvalidQuantityError(f"{operation} quantity must be a positive number")
    if value > MAX_STOCK:
        raise InvalidQuantityError(f"{operation} quantity cannot exceed {MAX_STOCK}")
    return value

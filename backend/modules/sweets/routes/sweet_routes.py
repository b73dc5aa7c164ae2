# backend/modules/sweets/routes/sweet_routes.py

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import get_current_user, require_admin
from core.auth_context import AuthContextData
from core.database import get_db
from ..models.sweet_models import Sweet as SweetModel
from ..schemas.sweet_schemas import (
    MessageResponse,
    StockChange,
    Sweet,
    SweetCreate,
    SweetDetailResponse,
    SweetListResponse,
    SweetMutationResponse,
    SweetUpdate,
)
from ..services.sweet_service import SweetService


router = APIRouter(prefix="/api/sweets", tags=["Sweets"])


def get_sweet_service(db: Session = Depends(get_db)) -> SweetService:
    """Dependency to get sweet service instance"""
    return SweetService(db)


def _serialize(sweets: List[SweetModel]) -> List[Sweet]:
    return [Sweet.model_validate(sweet) for sweet in sweets]


@router.get("", response_model=SweetListResponse)
def list_sweets(
    sweet_service: SweetService = Depends(get_sweet_service),
    current_user: AuthContextData = Depends(get_current_user),
):
    """Get all sweets, newest first"""
    return SweetListResponse(sweets=_serialize(sweet_service.list_sweets()))


@router.get("/search", response_model=SweetListResponse)
def search_sweets(
    name: Optional[str] = Query(None, description="Case-insensitive name substring"),
    category: Optional[str] = Query(None, description="Case-insensitive category"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", description="Inclusive minimum price"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", description="Inclusive maximum price"),
    sweet_service: SweetService = Depends(get_sweet_service),
    current_user: AuthContextData = Depends(get_current_user),
):
    """Search sweets by name, category and price range"""
    sweets = sweet_service.search_sweets(
        name=name,
        category=category,
        min_price=min_price,
        max_price=max_price,
    )
    return SweetListResponse(sweets=_serialize(sweets))


@router.get("/{sweet_id}", response_model=SweetDetailResponse)
def get_sweet(
    sweet_id: UUID,
    sweet_service: SweetService = Depends(get_sweet_service),
    current_user: AuthContextData = Depends(get_current_user),
):
    """Get a sweet by ID"""
    return SweetDetailResponse(sweet=Sweet.model_validate(sweet_service.get_sweet_or_404(sweet_id)))


@router.post("", response_model=SweetMutationResponse, status_code=status.HTTP_201_CREATED)
def create_sweet(
    item_data: SweetCreate,
    sweet_service: SweetService = Depends(get_sweet_service),
    current_user: AuthContextData = Depends(require_admin),
):
    """Create a new sweet (admin only)"""
    sweet = sweet_service.create_sweet(item_data.model_dump())
    return SweetMutationResponse(
        message="Sweet created successfully", sweet=Sweet.model_validate(sweet)
    )


@router.put("/{sweet_id}", response_model=SweetMutationResponse)
def update_sweet(
    sweet_id: UUID,
    item_data: SweetUpdate,
    sweet_service: SweetService = Depends(get_sweet_service),
    current_user: AuthContextData = Depends(require_admin),
):
    """Update the supplied fields of a sweet (admin only)"""
    sweet = sweet_service.update_sweet(sweet_id, item_data.model_dump(exclude_unset=True))
    return SweetMutationResponse(
        message="Sweet updated successfully", sweet=Sweet.model_validate(sweet)
    )


@router.delete("/{sweet_id}", response_model=MessageResponse)
def delete_sweet(
    sweet_id: UUID,
    sweet_service: SweetService = Depends(get_sweet_service),
    current_user: AuthContextData = Depends(require_admin),
):
    """Permanently delete a sweet (admin only)"""
    sweet_service.delete_sweet(sweet_id)
    return MessageResponse(message="Sweet deleted successfully")


@router.post("/{sweet_id}/purchase", response_model=SweetMutationResponse)
def purchase_sweet(
    sweet_id: UUID,
    change: StockChange,
    sweet_service: SweetService = Depends(get_sweet_service),
    current_user: AuthContextData = Depends(get_current_user),
):
    """Buy ``quantity`` units of a sweet"""
    sweet = sweet_service.purchase(sweet_id, change.quantity)
    return SweetMutationResponse(
        message="Purchase successful", sweet=Sweet.model_validate(sweet)
    )


@router.post("/{sweet_id}/restock", response_model=SweetMutationResponse)
def restock_sweet(
    sweet_id: UUID,
    change: StockChange,
    sweet_service: SweetService = Depends(get_sweet_service),
    current_user: AuthContextData = Depends(require_admin),
):
    """Add ``quantity`` units to a sweet's stock (admin only)"""
    sweet = sweet_service.restock(sweet_id, change.quantity)
    return SweetMutationResponse(
        message="Restock successful", sweet=Sweet.model_validate(sweet)
    )

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from sweetshop.auth.dependencies import get_current_user, require_admin
from sweetshop.core.errors import ValidationFailed
from sweetshop.database import get_db
from sweetshop.models.sweet import MAX_SWEET_ID
from sweetshop.schemas.sweet import (
    MessageResponse,
    QuantityRequest,
    SweetCategory,
    SweetCreate,
    SweetDetailResponse,
    SweetListResponse,
    SweetResponse,
    SweetSearchCriteria,
    SweetUpdate,
)
from sweetshop.schemas.user import CurrentUser
from sweetshop.services import inventory_service, sweet_service

router = APIRouter(tags=['sweets'])

SweetId = Annotated[int, Path(le=MAX_SWEET_ID)]


def search_criteria(
    name: str | None = Query(default=None, min_length=1, max_length=100),
    category: SweetCategory | None = Query(default=None),
    min_price: float | None = Query(default=None, ge=0, alias='minPrice'),
    max_price: float | None = Query(default=None, ge=0, alias='maxPrice'),
) -> SweetSearchCriteria:
    if name is not None and not name.strip():
        raise ValidationFailed([
            {'field': 'name', 'message': 'Search name must be between 1 and 100 characters'},
        ])
    if min_price is not None and max_price is not None and max_price < min_price:
        raise ValidationFailed([
            {'field': 'maxPrice', 'message': 'Maximum price must be greater than minimum price'},
        ])

    return SweetSearchCriteria(
        name=name.strip() if name is not None else None,
        category=category,
        min_price=min_price,
        max_price=max_price,
    )


def _listing(sweets) -> SweetListResponse:
    data = [SweetResponse.model_validate(sweet) for sweet in sweets]
    return SweetListResponse(count=len(data), data=data)


@router.get('', response_model=SweetListResponse)
def list_sweets(db: Session = Depends(get_db)):
    return _listing(sweet_service.list_sweets(db))


@router.get('/search', response_model=SweetListResponse)
def search_sweets(
    criteria: SweetSearchCriteria = Depends(search_criteria),
    db: Session = Depends(get_db),
):
    return _listing(sweet_service.search_sweets(db, criteria))


@router.get('/{sweet_id}', response_model=SweetDetailResponse, response_model_exclude_none=True)
def get_sweet(sweet_id: SweetId, db: Session = Depends(get_db)):
    return SweetDetailResponse(data=SweetResponse.model_validate(sweet_service.get_sweet(db, sweet_id)))


@router.post(
    '',
    response_model=SweetDetailResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_sweet(
    data: SweetCreate,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    sweet = sweet_service.create_sweet(db, data)
    return SweetDetailResponse(data=SweetResponse.model_validate(sweet))


@router.put('/{sweet_id}', response_model=SweetDetailResponse, response_model_exclude_none=True)
def update_sweet(
    sweet_id: SweetId,
    data: SweetUpdate,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    sweet = sweet_service.update_sweet(db, sweet_id, data)
    return SweetDetailResponse(data=SweetResponse.model_validate(sweet))


@router.delete('/{sweet_id}', response_model=MessageResponse)
def delete_sweet(
    sweet_id: SweetId,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    sweet_service.delete_sweet(db, sweet_id)
    return MessageResponse(message='Sweet deleted successfully')


@router.post('/{sweet_id}/purchase', response_model=SweetDetailResponse)
def purchase_sweet(
    sweet_id: SweetId,
    data: QuantityRequest,
    _current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    sweet = inventory_service.purchase_sweet(db, sweet_id, data.quantity)
    return SweetDetailResponse(message='Purchase successful', data=SweetResponse.model_validate(sweet))


@router.post('/{sweet_id}/restock', response_model=SweetDetailResponse)
def restock_sweet(
    sweet_id: SweetId,
    data: QuantityRequest,
    _admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    sweet = inventory_service.restock_sweet(db, sweet_id, data.quantity)
    return SweetDetailResponse(message='Restock successful', data=SweetResponse.model_validate(sweet))

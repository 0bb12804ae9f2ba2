"""Catalog CRUD and search over sweets."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sweetshop.core.errors import DuplicateSweetName, NotFound
from sweetshop.models.sweet import Sweet
from sweetshop.schemas.sweet import SweetCreate, SweetSearchCriteria, SweetUpdate

logger = logging.getLogger(__name__)

SWEET_NOT_FOUND = 'Sweet not found'


def build_search_filters(criteria: SweetSearchCriteria) -> list:
    """Translate search criteria into SQLAlchemy filter expressions, ANDed by the caller."""
    filters = []

    if criteria.name:
        term = criteria.name.strip()
        filters.append(
            or_(
                Sweet.name.icontains(term, autoescape=True),
                Sweet.category.icontains(term, autoescape=True),
                Sweet.description.icontains(term, autoescape=True),
            )
        )

    if criteria.category is not None:
        filters.append(Sweet.category == criteria.category.value)

    if criteria.min_price is not None:
        filters.append(Sweet.price >= criteria.min_price)

    if criteria.max_price is not None:
        filters.append(Sweet.price <= criteria.max_price)

    return filters


def list_sweets(db: Session) -> list[Sweet]:
    return db.query(Sweet).order_by(Sweet.created_at.desc(), Sweet.id.desc()).all()


def get_sweet(db: Session, sweet_id: int) -> Sweet:
    sweet = db.get(Sweet, sweet_id)
    if sweet is None:
        raise NotFound(SWEET_NOT_FOUND)
    return sweet


def search_sweets(db: Session, criteria: SweetSearchCriteria) -> list[Sweet]:
    return db.query(Sweet).filter(*build_search_filters(criteria)).order_by(Sweet.id.asc()).all()


def _commit_sweet(db: Session, sweet: Sweet) -> Sweet:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateSweetName() from exc
    db.refresh(sweet)
    return sweet


def create_sweet(db: Session, data: SweetCreate) -> Sweet:
    sweet = Sweet(**data.to_record())
    db.add(sweet)
    sweet = _commit_sweet(db, sweet)
    logger.info('Created sweet %s (%s)', sweet.id, sweet.name)
    return sweet


def update_sweet(db: Session, sweet_id: int, data: SweetUpdate) -> Sweet:
    sweet = get_sweet(db, sweet_id)
    for field, value in data.to_changes().items():
        setattr(sweet, field, value)
    return _commit_sweet(db, sweet)


def delete_sweet(db: Session, sweet_id: int) -> Sweet:
    sweet = get_sweet(db, sweet_id)
    db.delete(sweet)
    db.commit()
    logger.info('Deleted sweet %s', sweet_id)
    return sweet

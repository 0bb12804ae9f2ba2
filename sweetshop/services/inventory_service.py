"""Stock bookkeeping for purchases and restocks.

Both operations are a single UPDATE statement, so concurrent requests for the
same sweet cannot lose updates and a purchase can never push quantity below
zero: the decrement only applies while ``quantity >= requested``. Restocks
stop at MAX_QUANTITY, the largest value the column holds on every backend.
"""

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from sweetshop.core.errors import InsufficientStock, InvalidQuantity, NotFound
from sweetshop.models.sweet import MAX_QUANTITY, Sweet
from sweetshop.services.sweet_service import SWEET_NOT_FOUND

logger = logging.getLogger(__name__)


def validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantity()
    return quantity


def _apply(db: Session, statement) -> int:
    result = db.execute(statement.execution_options(synchronize_session=False))
    return result.rowcount


def _reload(db: Session, sweet_id: int) -> Sweet:
    sweet = db.get(Sweet, sweet_id)
    if sweet is None:
        raise NotFound(SWEET_NOT_FOUND)
    db.refresh(sweet)
    return sweet


def purchase_sweet(db: Session, sweet_id: int, quantity) -> Sweet:
    quantity = validate_quantity(quantity)

    # Stock never exceeds MAX_QUANTITY, so a larger request cannot be met.
    updated = 0
    if quantity <= MAX_QUANTITY:
        updated = _apply(
            db,
            update(Sweet)
            .where(Sweet.id == sweet_id, Sweet.quantity >= quantity)
            .values(quantity=Sweet.quantity - quantity),
        )
    if updated == 0:
        db.rollback()
        if db.get(Sweet, sweet_id) is None:
            raise NotFound(SWEET_NOT_FOUND)
        raise InsufficientStock()

    db.commit()
    sweet = _reload(db, sweet_id)
    logger.info('Purchased %s of sweet %s, %s left', quantity, sweet_id, sweet.quantity)
    return sweet


def restock_sweet(db: Session, sweet_id: int, quantity) -> Sweet:
    quantity = validate_quantity(quantity)
    if quantity > MAX_QUANTITY:
        raise InvalidQuantity()

    updated = _apply(
        db,
        update(Sweet)
        .where(Sweet.id == sweet_id, Sweet.quantity <= MAX_QUANTITY - quantity)
        .values(quantity=Sweet.quantity + quantity),
    )
    if updated == 0:
        db.rollback()
        if db.get(Sweet, sweet_id) is None:
            raise NotFound(SWEET_NOT_FOUND)
        raise InvalidQuantity()

    db.commit()
    sweet = _reload(db, sweet_id)
    logger.info('Restocked sweet %s by %s, now %s', sweet_id, quantity, sweet.quantity)
    return sweet

"""Header badge counts.

Counts are advisory UI data: anonymous callers, vanished users and store
failures all read as zero.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from xsplatform.app.common.auth import Identity
from xsplatform.app.extensions import db
from xsplatform.app.models import CartItem, User, WishlistItem

logger = logging.getLogger(__name__)


def cart_count(identity: Optional[Identity]) -> int:
    if identity is None:
        return 0
    try:
        if db.session.get(User, identity.id) is None:
            return 0
        count = (
            db.session.query(db.func.coalesce(db.func.sum(CartItem.quantity), 0))
            .filter(CartItem.user_id == identity.id)
            .scalar()
        )
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Cart count lookup failed for user %s", identity.id)
        return 0
    return max(int(count or 0), 0)


def wishlist_count(identity: Optional[Identity]) -> int:
    if identity is None:
        return 0
    try:
        if db.session.get(User, identity.id) is None:
            return 0
        count = WishlistItem.query.filter_by(user_id=identity.id).count()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Wishlist count lookup failed for user %s", identity.id)
        return 0
    return int(count)

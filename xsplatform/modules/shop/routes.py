from __future__ import annotations

from flask import Blueprint, request

from xsplatform.app.extensions import db
from xsplatform.app.models import Product
from xsplatform.app.common.auth import resolve_identity
from xsplatform.modules.shop.counts import cart_count, wishlist_count

bp = Blueprint("shop", __name__)

QUICK_SEARCH_MAX = 10


@bp.get("/shop/cart/count")
def get_cart_count():
    return {"success": True, "count": cart_count(resolve_identity())}, 200


@bp.get("/shop/wishlist/count")
def get_wishlist_count():
    return {"success": True, "count": wishlist_count(resolve_identity())}, 200


@bp.get("/shop/search/quick")
def quick_search():
    """Suggestions for the header search box."""
    q = (request.args.get("q") or "").strip()
    try:
        limit = int(request.args.get("limit", 5))
    except ValueError:
        limit = 5
    limit = min(max(limit, 1), QUICK_SEARCH_MAX)

    if not q:
        return {"success": True, "results": []}, 200

    like = f"%{q}%"
    products = (
        Product.query.filter(
            db.or_(
                Product.name.ilike(like),
                Product.description.ilike(like),
                Product.category.ilike(like),
            )
        )
        .order_by(Product.rating.desc(), Product.id.asc())
        .limit(limit)
        .all()
    )
    return {
        "success": True,
        "results": [
            {
                "id": p.id,
                "name": p.name,
                "price": p.price_cents / 100,
                "category": p.category,
                "type": p.type,
            }
            for p in products
        ],
    }, 200

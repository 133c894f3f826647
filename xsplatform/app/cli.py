from __future__ import annotations

from flask import Blueprint
from werkzeug.security import generate_password_hash

from xsplatform.app.extensions import db
from xsplatform.app.models import User, Product, CartItem, WishlistItem

cli_bp = Blueprint("cli", __name__, cli_group=None)

DEMO_EMAIL = "user@example.com"
DEMO_PASSWORD = "Password123!"


@cli_bp.cli.command("init-db")
def init_db() -> None:
    """Create tables."""
    db.create_all()
    print("DB initialized (tables created).")


@cli_bp.cli.command("seed")
def seed_data() -> None:
    """Seed minimal dev data.

    Safe to run multiple times; it will no-op if data exists.
    """
    db.create_all()

    if Product.query.count() == 0:
        db.session.add_all([
            Product(name="Industrial Safety Kit", description="Helmets, gloves and goggles.", category="safety", type="product", price_cents=8999, rating=4.6),
            Product(name="Forklift Rental", description="Daily forklift hire with operator.", category="equipment", type="service", location="Nairobi", price_cents=25000, rating=4.2),
            Product(name="Steel Toe Boots", description="Certified protective footwear.", category="safety", type="product", price_cents=5499, rating=4.8),
            Product(name="Site Inspection", description="On-site compliance inspection.", category="consulting", type="service", price_cents=15000, rating=4.0),
        ])

    if not User.query.filter_by(email=DEMO_EMAIL).first():
        user = User(
            email=DEMO_EMAIL,
            password_hash=generate_password_hash(DEMO_PASSWORD),
            first_name="Demo",
            last_name="User",
        )
        db.session.add(user)
        db.session.flush()
        db.session.add_all([
            CartItem(user_id=user.id, product_id="1", name="Industrial Safety Kit", price_cents=8999, quantity=2),
            CartItem(user_id=user.id, product_id="3", name="Steel Toe Boots", price_cents=5499, quantity=1),
            WishlistItem(user_id=user.id, product_id="2", name="Forklift Rental", price_cents=25000),
        ])

    db.session.commit()
    print(f"Seed complete. Login: {DEMO_EMAIL} / {DEMO_PASSWORD}")

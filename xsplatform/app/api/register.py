from flask import Flask

from xsplatform.modules.auth.routes import bp as auth_bp
from xsplatform.modules.shop.routes import bp as shop_bp
from xsplatform.modules.pages.routes import bp as pages_bp


def register_api_blueprints(app: Flask) -> None:
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(shop_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "XS Platform API",
            "version": "0.1.0",
            "endpoints": {
                "auth": ["/auth/register", "/auth/login", "/auth/logout", "/auth/me"],
                "shop": ["/shop/cart/count", "/shop/wishlist/count", "/shop/search/quick"],
            },
        }, 200


def register_page_blueprints(app: Flask) -> None:
    app.register_blueprint(pages_bp)

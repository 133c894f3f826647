from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from xsplatform.app.config import Config
from xsplatform.app.extensions import db, migrate, cors
from xsplatform.app.common.errors import ApiError, PageNotFound
from xsplatform.app.common.request_context import init_request_id, mirror_request_id
from xsplatform.app.api.register import register_api_blueprints, register_page_blueprints
from xsplatform.app.cli import cli_bp
from xsplatform.modules.pages.routes import render_error_page
from xsplatform.modules.pages.store import init_pages


def _wants_json() -> bool:
    return request.path == "/api" or request.path.startswith("/api/")


def create_app(config_object: type[Config] = Config) -> Flask:
    # Static files are served by the pages blueprint under /css, /js and /images.
    app = Flask(__name__, instance_relative_config=True, static_folder=None)
    app.config.from_object(config_object)

    if not app.config.get("SECRET_KEY"):
        raise RuntimeError("SECRET_KEY must be set in the environment")
    if not app.config.get("JWT_SECRET"):
        app.config["JWT_SECRET"] = app.config["SECRET_KEY"]
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(hours=app.config["SESSION_HOURS"])

    # Basic logging
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})
    init_pages(app)

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    app.after_request(mirror_request_id)

    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_api_blueprints(app)
    register_page_blueprints(app)

    # CLI (flask seed, flask init-db)
    app.register_blueprint(cli_bp)

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(g.get("request_id"))), err.status_code

    @app.errorhandler(PageNotFound)
    def handle_page_not_found(err: PageNotFound):
        app.logger.info("No page fragment for %r", err.name)
        return render_error_page(404, "Page not found")

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or 500
        if _wants_json():
            # Normalize Werkzeug errors into our JSON shape
            return handle_api_error(ApiError(status, "http_error", err.description or err.name, {"name": err.name}))
        return render_error_page(status, err.name)

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception on %s %s", request.method, request.path)
        if _wants_json():
            return handle_api_error(ApiError(500, "internal_error", "Internal server error"))
        return render_error_page(500, "Internal server error")

    return app

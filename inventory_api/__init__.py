# --- inventory_api/__init__.py ---
import logging

from flask import Flask, jsonify
from flask.logging import default_handler
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .config import Config
from .errors import InventoryError
from .extensions import db, cors
from .utils.api import err


def _configure_logging(app):
    pkg_logger = logging.getLogger(__name__)
    if default_handler not in pkg_logger.handlers:
        pkg_logger.addHandler(default_handler)
    pkg_logger.setLevel(app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])


def _register_error_handlers(app):
    @app.errorhandler(InventoryError)
    def handle_inventory_error(e):
        if e.status_code >= 500:
            app.logger.error("%s: %s", type(e).__name__, e.message)
        resp = jsonify(e.to_dict())
        resp.status_code = e.status_code
        return resp

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(e):
        db.session.rollback()
        app.logger.exception("Unhandled store error")
        return err(str(getattr(e, "orig", None) or e), status_code=500)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return err(e.description, status_code=e.code)


def create_app(test_config=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if test_config:
        app.config.from_mapping(test_config)
    Config.init_app(app)
    app.json.sort_keys = False

    _configure_logging(app)

    # Init extensions
    db.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Register blueprints
    from .category import bp as category_bp; app.register_blueprint(category_bp)
    from .product import bp as product_bp; app.register_blueprint(product_bp)
    from .inventory import bp as inventory_bp; app.register_blueprint(inventory_bp)

    from .cli import register_cli, seed_demo_data
    register_cli(app)
    _register_error_handlers(app)

    @app.get("/")
    def health():
        return jsonify(ok=True, msg="API running")

    with app.app_context():
        from .schema import ensure_schema
        from .services import InventoryRepository
        ensure_schema(db.engine)
        if app.config["SEED_DEMO_DATA"]:
            try:
                seed_demo_data(InventoryRepository(db.session))
            except InventoryError as e:
                app.logger.error("Demo seed failed: %s", e.message)

    return app

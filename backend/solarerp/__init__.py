# backend/solarerp/__init__.py
from flask import Flask, request

from .config import Config
from .extensions import db, migrate
from .permissions import ROLE_PERMISSIONS, ConfigurationError, PermissionResolver


def create_app(config_overrides: dict | None = None, permission_table=ROLE_PERMISSIONS) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Startup validation: a role without a permission row is fatal
    try:
        resolver = PermissionResolver(permission_table)
    except ConfigurationError:
        app.logger.critical("Role permission table failed validation; refusing to start")
        raise
    app.extensions["permission_resolver"] = resolver

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.auth import auth_bp
    from .routes.permissions import permissions_bp
    from .routes.navigation import navigation_bp
    from .routes.barter import barter_bp
    from .routes.catalog import catalog_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(permissions_bp)
    app.register_blueprint(navigation_bp)
    app.register_blueprint(barter_bp)
    app.register_blueprint(catalog_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config["CORS_ORIGINS"]:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app

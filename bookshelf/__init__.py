import logging

from flask import Flask
from .config import Config
from .errors import register_error_handlers
from .extensions import cors, init_store


def _configure_logging(level: int):
    root = logging.getLogger()
    if root.handlers:
        # Already configured (tests, repeated create_app)
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(config_class: type[Config] = Config):
    app = Flask(__name__, template_folder="templates")
    app.config.from_object(config_class)
    level = getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO)
    _configure_logging(level)
    app.logger.setLevel(level)

    # Records keep id/title/author/available order in responses
    app.json.sort_keys = False

    # Extensions
    cors.init_app(app, origins=app.config["CORS_ORIGINS"])
    store = init_store(app)
    app.logger.info("Using books file %s", store.path)

    register_error_handlers(app)

    # Blueprints
    from .routes.pages import bp as pages_bp
    from .routes.books_api import bp as books_api

    app.register_blueprint(pages_bp)
    app.register_blueprint(books_api)

    return app

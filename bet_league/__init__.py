import logging
import os

from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from config import config

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()


def create_app(config_name=None):
    app = Flask(__name__)

    # Determine configuration
    if config_name is None:
        config_name = os.environ.get("FLASK_CONFIG", "default")

    app.config.from_object(config[config_name]())

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Setup logging
    from bet_league.utils.logging_config import setup_logging

    setup_logging(app)

    # Show configuration warnings
    show_config_warnings(app, config_name)

    # Create database tables
    with app.app_context():
        db.create_all()

    return app


def show_config_warnings(app, config_name):
    """Log configuration warnings and status"""
    import warnings

    app.logger.info(f"Bet League starting with '{config_name}' configuration")

    if config_name == "production" and app.config.get("DEBUG"):
        warnings.warn("DEBUG mode is enabled in production!", UserWarning)

    if not app.config.get("EVALUATION_AUDIT_ENABLED", True):
        app.logger.warning("Evaluation audit log is disabled")

    db_url = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if "sqlite" in db_url:
        if "memory" in db_url:
            app.logger.info("Using SQLite database: in-memory (testing)")
        else:
            app.logger.info("Using SQLite database (development mode)")
    elif "postgresql" in db_url:
        # Extract host and database name for display (hide password)
        import re

        match = re.search(r"postgresql.*?://.*?@([^:/]+):?(\d+)?/([^?]+)", db_url)
        if match:
            host, port, dbname = match.groups()
            app.logger.info(f"Using PostgreSQL database {dbname} at {host}:{port or '5432'}")
        else:
            app.logger.info("Using PostgreSQL database")
    else:
        scheme = db_url.split("://")[0] if "://" in db_url else "Unknown"
        app.logger.info(f"Using database: {scheme}")


from bet_league import models  # noqa: F401, E402 - imported for model registration

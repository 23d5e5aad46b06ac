"""HTTP API for commission performance and analytics."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from flask import Flask, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from commtrack.config import Settings
from commtrack.database import Database, create_database
from commtrack.domain.analytics import AnalyticsService
from commtrack.domain.entity import EntityService
from commtrack.domain.stats import CommissionStatsService
from commtrack.utils.cache import TTLCache

logger = logging.getLogger(__name__)

EXTENSION_KEY = "commtrack"


@dataclass
class AppServices:
    """Services shared by every request of one application."""

    db: Database
    cache: TTLCache
    entities: EntityService
    stats: CommissionStatsService
    analytics: AnalyticsService


def get_services() -> AppServices:
    return current_app.extensions[EXTENSION_KEY]


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[Database] = None,
    cache: Optional[TTLCache] = None,
    today: Callable[[], date] = date.today,
) -> Flask:
    """Create the Flask application.

    Args:
        settings: Settings to use; read from the environment if None
        db: Database to serve; created from settings if None
        cache: Stats cache; created from settings if None
        today: Callable returning the default reference date

    Returns:
        Configured Flask app
    """
    settings = settings or Settings.from_env()

    if db is None:
        db = create_database(database_url=settings.database_url, database_path=settings.database_path)
        db.connect()
        db.initialize_schema()

    if cache is None:
        cache = TTLCache(ttl=settings.cache_ttl, maxsize=settings.cache_max_size)
    cache.clear()

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = AppServices(
        db=db,
        cache=cache,
        entities=EntityService(db),
        stats=CommissionStatsService(db, cache=cache, today=today),
        analytics=AnalyticsService(db),
    )

    from commtrack.web.routes import analytics_bp, performance_bp

    app.register_blueprint(performance_bp, url_prefix="/api")
    app.register_blueprint(analytics_bp, url_prefix="/api/analytics")

    @app.teardown_appcontext
    def release_session(exception=None):
        db.disconnect()

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        logger.exception("Unhandled database error")
        return jsonify({"success": False, "message": "Database error"}), 500

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    logger.info("Application created (cache ttl=%ss, maxsize=%s)", settings.cache_ttl, settings.cache_max_size)
    return app

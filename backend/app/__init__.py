"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.app.config import Settings, get_settings
from backend.app.observability import configure_logging


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, format_json=settings.log_format == "json")

    app = Flask(__name__)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app

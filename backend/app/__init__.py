"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from backend import log_config
from backend.app.api.routes import api_bp
from backend.config import CalculatorSettings
from backend.core.calculator import RetirementCalculator


def create_app(settings: Optional[CalculatorSettings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or CalculatorSettings()
    log_config.setup(settings.log_level)

    app = Flask(__name__)

    CORS(
        app,
        resources={r"/api/*": {"origins": list(settings.cors_origins)}},
        supports_credentials=True,
    )

    app.extensions["retirement_calculator"] = RetirementCalculator(settings)
    app.register_blueprint(api_bp, url_prefix="/api")
    return app

"""
App Factory Module
Creates and configures the Flask application with all necessary components.
Implements the application factory pattern for better testing and modularity.
"""

import logging
from flask import Flask
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config import Config
from rules import PhraseConfigService
from style_analyzer import PhraseAnalyzer
from .api_routes import setup_routes
from .error_handlers import setup_error_handlers
from .profile_storage import ProfileStorage

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure Flask application using the application factory pattern."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json.ensure_ascii = app.config.get('JSON_AS_ASCII', True)

    setup_logging(app)

    CORS(app)

    rate_limit_config = config_class.get_rate_limit_config()
    limiter = Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=rate_limit_config['default_limits'],
        storage_uri=rate_limit_config['storage_uri'],
        strategy="fixed-window",
        enabled=rate_limit_config['enabled'],
    )
    app.limiter = limiter
    if rate_limit_config['enabled']:
        logger.info(f"✅ Rate limiting enabled: {', '.join(rate_limit_config['default_limits'])} per IP (health checks exempt)")
    else:
        logger.info("Rate limiting disabled")

    services = initialize_services(config_class)

    setup_routes(app, services['phrase_analyzer'], services['profile_storage'])
    setup_error_handlers(app)

    setattr(app, 'services', services)

    log_initialization_status(services)
    return app


def setup_logging(app):
    """Configure application logging."""
    logging.getLogger('werkzeug').setLevel(logging.INFO)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))


def initialize_services(config_class=Config):
    """Build the phrase analyzer and the profile store."""
    analysis_config = config_class.get_analysis_config()
    catalog_service = PhraseConfigService(analysis_config['phrase_catalog_path'])

    return {
        'phrase_analyzer': PhraseAnalyzer(catalog_service.get_phrase_rules()),
        'profile_storage': ProfileStorage(),
        'catalog_path': catalog_service.catalog_path,
    }


def log_initialization_status(services):
    """Log the status of all services."""
    rule_count = len(services['phrase_analyzer'].rules)
    if rule_count:
        logger.info(f"✅ Phrase analyzer ready with {rule_count} rules")
    else:
        logger.warning(f"⚠️ Phrase analyzer has no rules (catalog: {services['catalog_path']})")
    logger.info("✅ In-memory profile storage ready (profiles reset on restart)")

"""
Configuration for the LexaLab phrase coaching API.
"""

import os
import logging
import secrets
from dotenv import load_dotenv
from typing import Dict, Any, List

# Load environment variables (optional - only if .env file exists)
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == 'true'


class Config:
    """Application configuration."""

    ENVIRONMENT = os.environ.get('ENVIRONMENT', 'development')

    # Flask Configuration - Auto-generate secure key if not provided
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        SECRET_KEY = secrets.token_hex(32)
        if ENVIRONMENT == 'production':
            logging.warning("Using auto-generated SECRET_KEY. Set SECRET_KEY environment variable in production!")

    DEBUG = _env_flag('FLASK_DEBUG', 'false') and ENVIRONMENT != 'production'
    TESTING = False

    # Server
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 8080))

    # Keep curly quotes in suggestions and rationales verbatim
    JSON_AS_ASCII = False

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Rate limiting (health checks are always exempt)
    RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', 'true')
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATE_LIMITS = os.environ.get('RATE_LIMITS', '100 per hour;20 per minute')

    # Phrase catalog override; None means the catalog shipped with the rules package
    PHRASE_CATALOG_PATH = os.environ.get('PHRASE_CATALOG_PATH') or None

    @classmethod
    def get_rate_limits(cls) -> List[str]:
        return [limit.strip() for limit in cls.RATE_LIMITS.split(';') if limit.strip()]

    @classmethod
    def get_rate_limit_config(cls) -> Dict[str, Any]:
        """Get rate limiter configuration."""
        return {
            'enabled': cls.RATELIMIT_ENABLED,
            'default_limits': cls.get_rate_limits(),
            'storage_uri': cls.RATELIMIT_STORAGE_URI,
        }

    @classmethod
    def get_analysis_config(cls) -> Dict[str, Any]:
        """Get phrase analysis configuration."""
        return {
            'phrase_catalog_path': cls.PHRASE_CATALOG_PATH,
        }


# For testing only
class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    SECRET_KEY = 'testing-secret-key-not-for-production'
    RATELIMIT_ENABLED = False

"""
Error Handlers Module
Returns JSON bodies for HTTP errors instead of Flask's default HTML pages.
"""

import logging
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


def setup_error_handlers(app):
    """Register JSON error handlers on the Flask application."""

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'method not allowed'}), 405

    @app.errorhandler(429)
    def rate_limit_exceeded(error):
        logger.warning(f"Rate limit exceeded: {error.description}")
        return jsonify({'error': 'rate limit exceeded'}), 429

    @app.errorhandler(Exception)
    def internal_error(error):
        # Let other HTTP errors keep their own status codes
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code
        logger.error(f"Unhandled error: {error}", exc_info=True)
        return jsonify({'error': 'internal server error'}), 500

"""
API Routes Module
Contains all Flask route handlers for the web application.
Handles phrase analysis, onboarding profiles, and health checks.
"""

import logging
from flask import request, jsonify

from .profile_storage import ProfileNotFoundError, ProfileValidationError, utc_timestamp

logger = logging.getLogger(__name__)

ANALYZE_BODY_ERROR = "Send { text: '...' } in JSON body."
ONBOARDING_BODY_ERROR = "userId and industry are required"


def _json_body():
    """Parsed JSON object body, or an empty dict for anything else."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _user_key(value):
    """Profile key for a submitted userId; profiles are stored under strings."""
    return str(value) if value else None


def setup_routes(app, phrase_analyzer, profile_storage):
    """Setup all API routes for the Flask application."""

    @app.before_request
    def log_request_info():
        """Log incoming requests, skipping health checks."""
        if request.path.startswith('/health'):
            return
        logger.debug(f"📥 {request.method} {request.path} (Content-Length: {request.content_length})")

    @app.route('/')
    def index():
        return 'LexaLab API is live!', 200, {'Content-Type': 'text/plain; charset=utf-8'}

    @app.route('/health')
    @app.limiter.exempt  # Exempt from rate limiting so liveness checks never fail
    def health_check():
        """Simple liveness endpoint."""
        return jsonify({'ok': True, 'time': utc_timestamp()}), 200

    @app.route('/health/detailed')
    @app.limiter.exempt
    def health_check_detailed():
        """Detailed health check with service status."""
        return jsonify({
            'status': 'healthy',
            'timestamp': utc_timestamp(),
            'rules_loaded': len(phrase_analyzer.rules),
            'profiles_stored': profile_storage.count(),
            'environment': app.config.get('ENVIRONMENT'),
        }), 200

    @app.route('/phrases/rules')
    def list_phrase_rules():
        """List the loaded phrase catalog."""
        return jsonify({'rules': [rule.to_dict() for rule in phrase_analyzer.rules]})

    @app.route('/phrases/analyze', methods=['POST'])
    def analyze_phrases():
        """Scan text for weak phrasing and return findings plus a suggested rewrite."""
        data = _json_body()
        text = data.get('text')
        if not text or not isinstance(text, str):
            return jsonify({'error': ANALYZE_BODY_ERROR}), 400

        industry = data.get('industry') or None
        goal = data.get('goal') or None

        # Fill missing tailoring fields from a stored profile; explicit values win
        profile = profile_storage.find_profile(_user_key(data.get('userId')))
        if profile is not None:
            industry = industry or profile.industry
            goal = goal or profile.primary_goal

        result = phrase_analyzer.analyze(text, {'industry': industry, 'goal': goal})
        logger.info(f"🔍 Analyzed {len(text)} chars: {len(result.findings)} findings")
        return jsonify(result.to_dict())

    @app.route('/onboarding', methods=['POST'])
    def onboarding():
        """Create or fully replace a user's tailoring profile."""
        data = _json_body()
        # Defaults apply only to omitted fields; explicit nulls are stored as sent
        optional = {
            name: data[key]
            for key, name in (('goals', 'goals'), ('tone', 'tone'), ('experienceLevel', 'experience_level'))
            if key in data
        }

        try:
            profile = profile_storage.upsert_profile(
                user_id=_user_key(data.get('userId')),
                industry=data.get('industry'),
                **optional,
            )
        except ProfileValidationError:
            return jsonify({'error': ONBOARDING_BODY_ERROR}), 400

        return jsonify({'ok': True, 'profile': profile.to_dict()})

    @app.route('/profile/<user_id>')
    def get_profile(user_id):
        try:
            profile = profile_storage.get_profile(user_id)
        except ProfileNotFoundError:
            return jsonify({'error': 'not found'}), 404
        return jsonify(profile.to_dict())

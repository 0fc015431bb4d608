"""
Flask JSON API for the dashboard.
"""

import logging
from typing import Optional

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from .analyzer import PasswordAnalyzer
from .breach_checker import BreachCache, BreachChecker
from .config import Config
from .errors import AnalysisError, StorageError, ValidationError
from .models import AnalysisRequest
from .storage import SQLRecorder, db, get_history, get_stats

log = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')


def anonymous_identity(req) -> Optional[str]:
    """Default identity loader: every caller is anonymous."""
    return None


def current_user_id() -> Optional[str]:
    identity_loader = current_app.config.get("IDENTITY_LOADER") or anonymous_identity
    return identity_loader(request)


def build_analyzer(config) -> PasswordAnalyzer:
    breach_checker = None
    if config.get("BREACH_CHECK_ENABLED", True):
        cache = BreachCache(
            ttl=config.get("BREACH_CACHE_TTL", Config.BREACH_CACHE_TTL),
            max_entries=config.get("BREACH_CACHE_MAX_ENTRIES", Config.BREACH_CACHE_MAX_ENTRIES),
        )
        breach_checker = BreachChecker(
            api_url=config.get("BREACH_API_URL", Config.BREACH_API_URL),
            timeout=config.get("BREACH_TIMEOUT", Config.BREACH_TIMEOUT),
            cache=cache,
        )
    recorder = SQLRecorder(history_limit=config.get("HISTORY_LIMIT", Config.HISTORY_LIMIT))
    return PasswordAnalyzer(breach_checker=breach_checker, recorder=recorder)


@api_bp.route('/ping')
def ping():
    return jsonify({"message": current_app.config.get("PING_MESSAGE", "ping")})


@api_bp.route('/password-analysis', methods=['POST'])
def password_analysis():
    try:
        analysis_request = AnalysisRequest.from_json(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    user_id = current_user_id()
    metadata = {
        "ip_address": request.remote_addr,
        "user_agent": request.headers.get("User-Agent"),
    }

    analyzer = current_app.extensions["securepass.analyzer"]
    try:
        result = analyzer.analyze(analysis_request, user_id=user_id, metadata=metadata)
    except (AnalysisError, StorageError):
        log.exception("Password analysis error")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify(result.to_dict())


@api_bp.route('/stats')
def stats():
    return jsonify({"success": True, "stats": get_stats()})


@api_bp.route('/history')
def history():
    """Saved history for the caller; requires an identity."""
    user_id = current_user_id()
    if not user_id:
        return jsonify({"success": False, "error": "Authentication required"}), 401
    limit = current_app.config.get("HISTORY_LIMIT", Config.HISTORY_LIMIT)
    entries = get_history(user_id, limit=limit)
    return jsonify({"success": True, "history": [entry.to_dict() for entry in entries]})


def create_app(config=None, analyzer: Optional[PasswordAnalyzer] = None) -> Flask:
    """Application factory. config is an object or import path for app.config."""
    app = Flask(__name__)
    app.config.from_object(config or Config)

    CORS(app)
    db.init_app(app)
    with app.app_context():
        db.create_all()

    app.extensions["securepass.analyzer"] = analyzer or build_analyzer(app.config)
    app.register_blueprint(api_bp)

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal server error"}), 500

    return app


def run_server():
    """Development server entry point."""
    app = create_app()
    app.run(debug=False)

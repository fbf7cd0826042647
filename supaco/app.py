import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import time
from datetime import timedelta

from flask import Flask, jsonify

# Structured logging
from core.utils.logging_config import setup_logging, get_logger
logger = setup_logging(
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    json_format=os.environ.get('PRODUCTION', 'false').lower() == 'true',
)
app_logger = get_logger('supaco.app')
app_logger.info('Supaco app module loading...')
from flask_compress import Compress
from flask_login import LoginManager
from core.auth.models import User
from core.auth.repositories import UserRepository
from database import ping_db, init_db

_user_repo = UserRepository()


app = Flask(__name__)

# Secret key: required in production, dev fallback only when FLASK_DEBUG=true.
# It also signs pending assistant actions.
_secret_key = os.environ.get('FLASK_SECRET_KEY')
if not _secret_key:
    if os.environ.get('FLASK_DEBUG', 'false').lower() == 'true':
        _secret_key = 'dev-secret-key-for-local-only'
        app_logger.warning('Using development secret key, set FLASK_SECRET_KEY for production')
    else:
        raise RuntimeError('FLASK_SECRET_KEY environment variable is required')
app.secret_key = _secret_key

compress = Compress()
compress.init_app(app)

# Flask-Login setup (API only: unauthenticated requests get JSON 401)
login_manager = LoginManager()
login_manager.init_app(app)

_secure_cookies = os.environ.get('PRODUCTION', 'false').lower() == 'true'
app.config['REMEMBER_COOKIE_DURATION'] = timedelta(days=30)
app.config['REMEMBER_COOKIE_SECURE'] = _secure_cookies
app.config['REMEMBER_COOKIE_HTTPONLY'] = True
app.config['REMEMBER_COOKIE_SAMESITE'] = 'Lax'
app.config['SESSION_COOKIE_SECURE'] = _secure_cookies
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# ============== Blueprint Registrations ==============

from core.auth import auth_bp
app.register_blueprint(auth_bp)

from crm import crm_bp
app.register_blueprint(crm_bp)

from assistant import assistant_bp
app.register_blueprint(assistant_bp)

app_logger.info(f'Supaco startup complete, {len(app.url_map._rules)} routes registered')

# ============== Global Error Handlers ==============

@app.errorhandler(404)
def handle_404(e):
    return jsonify({'message': 'Not found'}), 404

@app.errorhandler(405)
def handle_405(e):
    return jsonify({'message': 'Method not allowed'}), 405

@app.errorhandler(500)
def handle_500(e):
    app_logger.exception('Unhandled 500 error')
    return jsonify({'message': 'An internal error occurred'}), 500

# ============== Schema ==============

if not os.environ.get('TESTING'):
    try:
        init_db()
    except Exception as e:
        app_logger.error(f'Schema initialization failed: {e}')
        raise


# ============== Flask-Login ==============

_user_cache = {}
_USER_CACHE_TTL = 60  # seconds

@login_manager.user_loader
def load_user(user_id):
    """Load user by ID for Flask-Login (cached per-worker, 60s TTL)."""
    uid = int(user_id)
    now = time.time()
    cached = _user_cache.get(uid)
    if cached and (now - cached[1]) < _USER_CACHE_TTL:
        return cached[0]

    user_data = _user_repo.get_by_id(uid)
    if user_data:
        user = User(user_data)
        _user_cache[uid] = (user, now)
        return user
    _user_cache.pop(uid, None)
    return None


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'message': 'Authentication required'}), 401


# ============== Health Check ==============

@app.route('/health')
def health_check():
    """Liveness probe; only checks DB connectivity."""
    checks = {}

    try:
        checks['database'] = ping_db()
    except Exception as e:
        checks['database'] = False
        app_logger.error(f'Health check - database failed: {e}')

    status = 'healthy' if checks.get('database') else 'unhealthy'
    http_code = 200 if status == 'healthy' else 503

    return jsonify({
        'status': status,
        'checks': checks,
        'service': 'supaco',
    }), http_code


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'
    app.run(host='0.0.0.0', port=port, debug=debug)

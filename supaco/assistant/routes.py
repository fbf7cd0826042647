"""
AI Assistant Routes

JSON API: chat turns, confirmed action execution, quick suggestions.
"""

from flask import current_app, jsonify, request
from flask_login import current_user

from core.utils.api_helpers import RateLimiter, api_login_required, get_json_or_error, rate_limited
from core.utils.logging_config import get_logger
from . import assistant_bp
from .config import get_config
from .exceptions import (
    ConfigurationError,
    InvalidActionTokenError,
    LLMAuthenticationError,
    LLMProviderError,
)
from .models import ConversationTurn, PendingAction
from .services import ChatService, SuggestionService

logger = get_logger('supaco.assistant.routes')

_limiter = RateLimiter()

# Initialize services (singleton pattern)
_chat_service = None
_suggestion_service = None


def get_chat_service() -> ChatService:
    """Get or create the chat service instance."""
    global _chat_service
    if _chat_service is None:
        _chat_service = ChatService(secret_key=current_app.secret_key)
    return _chat_service


def get_suggestion_service() -> SuggestionService:
    global _suggestion_service
    if _suggestion_service is None:
        _suggestion_service = SuggestionService()
    return _suggestion_service


def _user_rate_key():
    return f'assistant:user:{current_user.id}'


def assistant_rate_limited(f):
    """Per-user request budget shared by every assistant endpoint."""
    return rate_limited(
        _limiter,
        max_requests=get_config().RATE_LIMIT_PER_MINUTE,
        window_seconds=60,
        key_func=_user_rate_key,
    )(f)


def _parse_history(raw):
    """Client transcript -> ConversationTurns; raises ValueError on bad entries."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("conversationHistory must be a list")
    return [ConversationTurn.from_dict(item) for item in raw]


# ============== Chat ==============

@assistant_bp.route('/chat', methods=['POST'])
@api_login_required
@assistant_rate_limited
def api_chat():
    """
    One chat turn.

    Body: {message?, conversationHistory?, confirmAction?}
    Returns: {response, conversationHistory, pendingAction?, actionExecuted?}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    message = data.get('message')
    raw_action = data.get('confirmAction')
    if not message and not raw_action:
        return jsonify({'message': 'Message required'}), 400

    try:
        history = _parse_history(data.get('conversationHistory'))
        confirm_action = PendingAction.from_dict(raw_action) if raw_action else None
    except ValueError as e:
        return jsonify({'message': str(e)}), 400

    if message is not None and not isinstance(message, str):
        return jsonify({'message': 'Message must be a string'}), 400

    try:
        result = get_chat_service().handle_turn(
            user_id=current_user.id,
            message=message,
            history=history,
            confirm_action=confirm_action,
        )
    except InvalidActionTokenError as e:
        logger.warning(f"Rejected action token for user {current_user.id}: {e}")
        return jsonify({'message': 'Invalid action'}), 400
    except ConfigurationError as e:
        logger.error(f"Assistant misconfigured: {e}")
        return jsonify({'message': 'AI provider API key not configured'}), 500
    except LLMAuthenticationError as e:
        logger.error(f"Provider rejected credentials: {e}")
        return jsonify({'message': 'Invalid or expired AI provider API key'}), 500
    except LLMProviderError as e:
        logger.error(f"Provider call failed: {e}")
        return jsonify({'message': 'Error while communicating with the AI assistant'}), 500
    except Exception:
        logger.exception(f"Chat turn failed for user {current_user.id}")
        return jsonify({'message': 'Error while communicating with the AI assistant'}), 500

    return jsonify(result.to_dict())


# ============== Actions ==============

@assistant_bp.route('/execute-action', methods=['POST'])
@api_login_required
@assistant_rate_limited
def api_execute_action():
    """
    Execute a confirmed action.

    Body: {action: {function, args, token?}}
    Returns: {success, message, data}
    """
    data, error = get_json_or_error()
    if error:
        return jsonify({'message': 'Invalid action'}), 400

    try:
        action = PendingAction.from_dict(data.get('action'))
    except ValueError:
        return jsonify({'message': 'Invalid action'}), 400

    try:
        result = get_chat_service().execute_action(action, current_user.id)
    except InvalidActionTokenError as e:
        logger.warning(f"Rejected action token for user {current_user.id}: {e}")
        return jsonify({'message': 'Invalid action'}), 400
    except Exception:
        logger.exception(f"Action {action.function} failed for user {current_user.id}")
        return jsonify({'message': 'Server error'}), 500

    return jsonify(result.to_dict())


# ============== Suggestions ==============

@assistant_bp.route('/suggestions', methods=['GET'])
@api_login_required
@assistant_rate_limited
def api_suggestions():
    """Quick insights and starter questions: {insights, questions}."""
    try:
        return jsonify(get_suggestion_service().get_suggestions(current_user.id))
    except Exception:
        logger.exception(f"Suggestions failed for user {current_user.id}")
        return jsonify({'message': 'Server error'}), 500

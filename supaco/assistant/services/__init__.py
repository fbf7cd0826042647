from .action_executor import ActionExecutor
from .chat_service import ChatService
from .context_service import ContextService
from .suggestion_service import SuggestionService

__all__ = ['ActionExecutor', 'ChatService', 'ContextService', 'SuggestionService']

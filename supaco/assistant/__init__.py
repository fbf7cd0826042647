"""
AI Assistant Module

Conversational assistant over the user's CRM data.

Features:
- Multi-provider LLM support (Groq, OpenAI, Claude) with tool calling
- Per-turn context snapshot of projects, prospects and deadlines
- Proposed actions are confirmed by the user before they run
"""
from flask import Blueprint

assistant_bp = Blueprint(
    'assistant',
    __name__,
    url_prefix='/api/ai',
)

# Import routes to register them
from . import routes  # noqa: E402, F401

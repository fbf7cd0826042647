"""
Assistant Configuration

Environment variables, defaults and prompt templates for the chat assistant.
"""

import os
from dataclasses import dataclass
from typing import Optional


# Environment variable holding the API key for each provider
PROVIDER_KEY_ENV = {
    'groq': 'GROQ_API_KEY',
    'openai': 'OPENAI_API_KEY',
    'claude': 'ANTHROPIC_API_KEY',
}

DEFAULT_MODELS = {
    'groq': 'llama-3.3-70b-versatile',
    'openai': 'gpt-4o-mini',
    'claude': 'claude-sonnet-4-20250514',
}


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == 'true'


@dataclass
class AssistantConfig:
    """Assistant configuration settings."""

    # Provider
    PROVIDER: str = 'groq'
    MODEL: str = DEFAULT_MODELS['groq']
    TEMPERATURE: float = 0.7
    MAX_TOKENS: int = 1024

    # Conversation
    MAX_HISTORY_MESSAGES: int = 10       # Client turns forwarded to the model
    LANGUAGE: str = 'English'

    # Context snapshot
    CONTEXT_PROJECT_LIMIT: int = 20
    CONTEXT_PROSPECT_LIMIT: int = 20
    CONTEXT_DEADLINE_LIMIT: int = 5
    PROMPT_ITEM_LIMIT: int = 10          # Projects/prospects embedded in the prompt
    CURRENCY_SYMBOL: str = '€'
    DATE_FORMAT: str = '%d/%m/%Y'

    # Pending actions
    ACTION_TOKEN_TTL: int = 900          # Seconds a signed pending action stays valid
    REQUIRE_SIGNED_ACTIONS: bool = False

    # Rate limiting (requests per user per minute)
    RATE_LIMIT_PER_MINUTE: int = 30

    @property
    def api_key_env(self) -> str:
        return PROVIDER_KEY_ENV.get(self.PROVIDER, '')

    @property
    def api_key(self) -> Optional[str]:
        """API key of the configured provider, read at call time."""
        env_name = self.api_key_env
        return os.environ.get(env_name) if env_name else None

    @classmethod
    def from_env(cls) -> 'AssistantConfig':
        """Load configuration from environment variables."""
        provider = os.environ.get('AI_ASSISTANT_PROVIDER', 'groq').lower()
        return cls(
            PROVIDER=provider,
            MODEL=os.environ.get('AI_ASSISTANT_MODEL', DEFAULT_MODELS.get(provider, DEFAULT_MODELS['groq'])),
            TEMPERATURE=float(os.environ.get('AI_ASSISTANT_TEMPERATURE', '0.7')),
            MAX_TOKENS=int(os.environ.get('AI_ASSISTANT_MAX_TOKENS', '1024')),
            MAX_HISTORY_MESSAGES=int(os.environ.get('AI_ASSISTANT_MAX_HISTORY', '10')),
            LANGUAGE=os.environ.get('AI_ASSISTANT_LANGUAGE', 'English'),
            CURRENCY_SYMBOL=os.environ.get('AI_ASSISTANT_CURRENCY', '€'),
            DATE_FORMAT=os.environ.get('AI_ASSISTANT_DATE_FORMAT', '%d/%m/%Y'),
            ACTION_TOKEN_TTL=int(os.environ.get('AI_ASSISTANT_ACTION_TTL', '900')),
            REQUIRE_SIGNED_ACTIONS=_env_bool('AI_ASSISTANT_REQUIRE_SIGNED_ACTIONS', 'false'),
            RATE_LIMIT_PER_MINUTE=int(os.environ.get('AI_ASSISTANT_RATE_LIMIT', '30')),
        )


SYSTEM_PROMPT_TEMPLATE = """You are the AI assistant of Supaco, a project management and sales prospecting application.
You can PERFORM ACTIONS for the user by calling the available functions.

Today's date: {today}

CURRENT USER DATA:

STATISTICS:
{statistics}

PROJECTS ({project_count}):
{projects}

PROSPECTS ({prospect_count}):
{prospects}

UPCOMING DEADLINES:
{deadlines}

INSTRUCTIONS:
- Always answer in {language}
- Base every figure you quote on the data above; never invent projects, prospects or amounts
- You CAN perform actions: create projects, prospects, tasks and notes, and change statuses
- When the user asks to create or change something, use the available functions
- If information required for an action is missing, ask for it politely
- Be proactive: offer to perform a relevant action when it would help
- Every action is shown to the user for confirmation before it runs
- Use the YYYY-MM-DD format for dates"""


# Default configuration instance
_default_config: Optional[AssistantConfig] = None


def get_config() -> AssistantConfig:
    """Get the default configuration instance."""
    global _default_config
    if _default_config is None:
        _default_config = AssistantConfig.from_env()
    return _default_config


def reset_config():
    """Reset configuration (for testing)."""
    global _default_config
    _default_config = None

"""
Assistant LLM Providers

Multi-provider abstraction over chat APIs with tool calling.
"""

from .base_provider import BaseProvider
from .claude_provider import ClaudeProvider
from .openai_provider import OpenAIProvider
from .groq_provider import GroqProvider

PROVIDERS = {
    'groq': GroqProvider,
    'openai': OpenAIProvider,
    'claude': ClaudeProvider,
}


def get_provider(name: str) -> BaseProvider:
    """Instantiate the provider registered under `name`.

    Raises:
        ValueError: for an unknown provider name
    """
    try:
        return PROVIDERS[name]()
    except KeyError:
        raise ValueError(f"Unknown LLM provider '{name}'. Use one of: {', '.join(PROVIDERS)}")


__all__ = [
    'BaseProvider',
    'ClaudeProvider',
    'OpenAIProvider',
    'GroqProvider',
    'PROVIDERS',
    'get_provider',
]

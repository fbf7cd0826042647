"""
Groq Provider

Groq LLM provider for fast inference. Groq speaks the OpenAI chat-completions
dialect, including function calling, so only the client and error types differ.
"""

import groq

from core.utils.logging_config import get_logger
from ..exceptions import LLMProviderError, LLMRateLimitError, LLMAuthenticationError
from .openai_provider import OpenAIProvider

logger = get_logger('supaco.assistant.providers.groq')


class GroqProvider(OpenAIProvider):
    """Groq LLM provider (default for the assistant)."""

    api_key_env = 'GROQ_API_KEY'
    sdk_error_types = (groq.APIError,)

    @property
    def name(self) -> str:
        return "groq"

    def _create_client(self, api_key: str):
        return groq.Groq(api_key=api_key)

    def _classify_error(self, error: Exception) -> LLMProviderError:
        if isinstance(error, groq.AuthenticationError):
            return LLMAuthenticationError(self.name, str(error))
        if isinstance(error, groq.RateLimitError):
            retry_after = None
            response = getattr(error, 'response', None)
            if response is not None:
                header = response.headers.get('retry-after')
                if header and header.isdigit():
                    retry_after = int(header)
            logger.warning(f"Groq rate limit exceeded (retry_after={retry_after})")
            return LLMRateLimitError(self.name, retry_after)
        return LLMProviderError(self.name, f"API error: {error}")

"""
Base Provider

Abstract base class for LLM providers with tool calling.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional

from ..models import LLMResponse


class BaseProvider(ABC):
    """Abstract base class for LLM providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'groq', 'openai', 'claude')."""
        pass

    @abstractmethod
    def generate(
        self,
        model_name: str,
        messages: List[Dict[str, str]],
        max_tokens: int = 1024,
        temperature: float = 0.7,
        api_key: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        tool_choice: Optional[str] = None,
        **kwargs,
    ) -> LLMResponse:
        """
        Generate a response from the LLM.

        Args:
            model_name: Model identifier
            messages: List of message dicts with 'role' and 'content'
                (a leading 'system' message carries the system prompt)
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature
            api_key: API key (optional, falls back to environment)
            tools: Provider-formatted tool schemas (see format_tool_schemas)
            tool_choice: 'auto', 'none' or 'required'
            **kwargs: Provider-specific options

        Returns:
            LLMResponse with text content and/or tool calls. Tool call
            arguments are returned serialized, exactly as the provider sent them.

        Raises:
            LLMAuthenticationError: If the API key is rejected
            LLMRateLimitError: If rate limited
            LLMProviderError: For any other API or network failure
        """
        pass

    @abstractmethod
    def format_tool_schemas(self, schemas: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Convert provider-neutral tool schemas to this provider's wire format.

        Args:
            schemas: List of {'name', 'description', 'parameters'} dicts

        Returns:
            Tool list ready to pass as `tools` to generate()
        """
        pass

    def format_messages(
        self,
        messages: List[Dict[str, str]],
    ) -> List[Dict[str, str]]:
        """
        Format messages for this provider.

        Default implementation returns messages as-is.
        Override for provider-specific formatting.
        """
        return messages

    def extract_system_message(
        self,
        messages: List[Dict[str, str]],
    ) -> tuple[Optional[str], List[Dict[str, str]]]:
        """
        Split the system message(s) from the rest of the conversation.

        Anthropic takes the system prompt as a separate parameter.

        Returns:
            Tuple of (system_content, remaining_messages)
        """
        system_parts = []
        remaining = []

        for msg in messages:
            if msg.get('role') == 'system':
                system_parts.append(msg.get('content', ''))
            else:
                remaining.append(msg)

        system_content = '\n\n'.join(part for part in system_parts if part) or None
        return system_content, remaining

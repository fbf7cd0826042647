"""
OpenAI Provider

OpenAI chat-completions provider with function calling.
"""

import os
from typing import List, Dict, Any, Optional

import openai

from core.utils.logging_config import get_logger
from ..models import LLMResponse, ToolCall
from ..exceptions import LLMProviderError, LLMRateLimitError, LLMAuthenticationError
from .base_provider import BaseProvider

logger = get_logger('supaco.assistant.providers.openai')


class OpenAIProvider(BaseProvider):
    """OpenAI GPT LLM provider."""

    api_key_env = 'OPENAI_API_KEY'
    # SDK exceptions translated by _classify_error()
    sdk_error_types = (openai.APIError,)

    @property
    def name(self) -> str:
        return "openai"

    def _create_client(self, api_key: str):
        return openai.OpenAI(api_key=api_key)

    def _classify_error(self, error: Exception) -> LLMProviderError:
        """Map an SDK exception to the assistant's provider error hierarchy."""
        if isinstance(error, openai.AuthenticationError):
            return LLMAuthenticationError(self.name, str(error))
        if isinstance(error, openai.RateLimitError):
            return LLMRateLimitError(self.name)
        return LLMProviderError(self.name, f"API error: {error}")

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
        Generate a response using the chat completions API.

        Raises:
            LLMAuthenticationError: If the API key is missing or rejected
            LLMRateLimitError: If rate limited
            LLMProviderError: If the API call fails
        """
        key = api_key or os.environ.get(self.api_key_env)
        if not key:
            raise LLMAuthenticationError(self.name, f"{self.api_key_env} not found")

        formatted_messages = self.format_messages(messages)

        # Clamp temperature to the API's range (0.0-2.0)
        temperature = max(0.0, min(2.0, temperature))

        request_params = {
            'model': model_name,
            'messages': formatted_messages,
            'max_tokens': max_tokens,
            'temperature': temperature,
        }
        if tools:
            request_params['tools'] = tools
            request_params['tool_choice'] = tool_choice or 'auto'

        try:
            client = self._create_client(key)

            logger.debug(
                f"{self.name} API request: model={model_name}, "
                f"messages={len(formatted_messages)}, tools={len(tools) if tools else 0}"
            )

            response = client.chat.completions.create(**request_params)
        except self.sdk_error_types as e:
            error = self._classify_error(e)
            logger.error(f"{self.name} API call failed: {e}")
            raise error from e

        content = ""
        finish_reason = None
        tool_calls = []
        if response.choices:
            choice = response.choices[0]
            content = choice.message.content or ""
            finish_reason = choice.finish_reason
            for tc in choice.message.tool_calls or []:
                tool_calls.append(ToolCall(
                    id=tc.id,
                    name=tc.function.name,
                    arguments=tc.function.arguments or "",
                ))

        input_tokens = response.usage.prompt_tokens if response.usage else 0
        output_tokens = response.usage.completion_tokens if response.usage else 0

        logger.debug(
            f"{self.name} API response: tokens_in={input_tokens}, "
            f"tokens_out={output_tokens}, tool_calls={len(tool_calls)}"
        )

        return LLMResponse(
            content=content,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model=model_name,
            finish_reason=finish_reason,
            tool_calls=tool_calls,
        )

    def format_tool_schemas(self, schemas: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Wrap schemas as chat-completions `function` tools."""
        return [
            {
                'type': 'function',
                'function': {
                    'name': schema['name'],
                    'description': schema['description'],
                    'parameters': schema['parameters'],
                },
            }
            for schema in schemas
        ]

    def format_messages(
        self,
        messages: List[Dict[str, str]],
    ) -> List[Dict[str, str]]:
        """Normalize roles to system/user/assistant."""
        formatted = []
        for msg in messages:
            role = msg.get('role', 'user')
            if role not in ('system', 'user', 'assistant'):
                role = 'user'
            formatted.append({'role': role, 'content': msg.get('content', '')})
        return formatted

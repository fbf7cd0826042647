"""
Claude Provider

Anthropic Claude LLM provider with tool use.
"""

import json
import os
from typing import List, Dict, Any, Optional

import anthropic

from core.utils.logging_config import get_logger
from ..models import LLMResponse, ToolCall
from ..exceptions import LLMProviderError, LLMRateLimitError, LLMAuthenticationError
from .base_provider import BaseProvider

logger = get_logger('supaco.assistant.providers.claude')


class ClaudeProvider(BaseProvider):
    """Anthropic Claude LLM provider."""

    @property
    def name(self) -> str:
        return "claude"

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
        Generate a response using Claude.

        The system message is lifted out of `messages` and sent as the
        `system` parameter. tool_use blocks are returned as ToolCalls whose
        arguments are the JSON-encoded block input.

        Raises:
            LLMAuthenticationError: If the API key is missing or rejected
            LLMRateLimitError: If rate limited
            LLMProviderError: If the API call fails
        """
        key = api_key or os.environ.get('ANTHROPIC_API_KEY')
        if not key:
            raise LLMAuthenticationError(self.name, "ANTHROPIC_API_KEY not found")

        system_content, remaining_messages = self.extract_system_message(messages)
        formatted_messages = self.format_messages(remaining_messages)

        # Clamp temperature to Claude's range (0.0-1.0)
        temperature = max(0.0, min(1.0, temperature))

        request_params = {
            'model': model_name,
            'max_tokens': max_tokens,
            'temperature': temperature,
            'messages': formatted_messages,
        }
        if system_content:
            request_params['system'] = system_content
        if tools:
            request_params['tools'] = tools
            request_params['tool_choice'] = {'type': tool_choice or 'auto'}

        try:
            client = anthropic.Anthropic(api_key=key)
            logger.debug(
                f"Claude API request: model={model_name}, "
                f"messages={len(formatted_messages)}, tools={len(tools) if tools else 0}"
            )
            response = client.messages.create(**request_params)

        except anthropic.AuthenticationError as e:
            logger.error(f"Claude authentication failed: {e}")
            raise LLMAuthenticationError(self.name, str(e)) from e

        except anthropic.RateLimitError as e:
            logger.warning(f"Claude rate limit exceeded: {e}")
            raise LLMRateLimitError(self.name) from e

        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            raise LLMProviderError(self.name, f"API error: {e}") from e

        text_parts = []
        tool_calls = []
        for block in response.content or []:
            if block.type == 'text':
                text_parts.append(block.text)
            elif block.type == 'tool_use':
                tool_calls.append(ToolCall(
                    id=block.id,
                    name=block.name,
                    arguments=json.dumps(block.input),
                ))

        input_tokens = response.usage.input_tokens if response.usage else 0
        output_tokens = response.usage.output_tokens if response.usage else 0

        logger.debug(
            f"Claude API response: tokens_in={input_tokens}, "
            f"tokens_out={output_tokens}, tool_calls={len(tool_calls)}"
        )

        return LLMResponse(
            content="".join(text_parts),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model=model_name,
            finish_reason=response.stop_reason,
            tool_calls=tool_calls,
        )

    def format_tool_schemas(self, schemas: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Anthropic tools take the JSON schema as `input_schema`."""
        return [
            {
                'name': schema['name'],
                'description': schema['description'],
                'input_schema': schema['parameters'],
            }
            for schema in schemas
        ]

    def format_messages(
        self,
        messages: List[Dict[str, str]],
    ) -> List[Dict[str, str]]:
        """
        Format messages for Claude API.

        Claude requires alternating user/assistant messages starting with
        the user. Consecutive messages of the same role are merged.
        """
        formatted = []
        prev_role = None

        for msg in messages:
            role = msg.get('role', 'user')
            content = msg.get('content', '')

            if role == 'system':
                continue
            if role not in ('user', 'assistant'):
                role = 'user'

            if role == prev_role and formatted:
                formatted[-1]['content'] += f"\n\n{content}"
            else:
                formatted.append({'role': role, 'content': content})
                prev_role = role

        if formatted and formatted[0]['role'] != 'user':
            formatted.insert(0, {'role': 'user', 'content': '[Conversation context]'})

        return formatted

"""
Chat Service

One conversational turn: either execute a confirmed action, or ask the model
for a reply with the tool catalog attached and turn a tool call into a
pending action awaiting confirmation.

The transcript is held by the client and sent back on every request; the
service keeps no per-conversation state.
"""

import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from core.utils.logging_config import get_logger, log_with_context
from ..config import AssistantConfig, SYSTEM_PROMPT_TEMPLATE, get_config
from ..exceptions import ConfigurationError, InvalidActionTokenError, MalformedToolCallError
from ..models import (
    ActionResult,
    ChatTurnResult,
    ConversationTurn,
    LLMResponse,
    MessageRole,
    PendingAction,
    ToolCall,
)
from ..providers import get_provider
from ..providers.base_provider import BaseProvider
from ..tools.registry import ToolRegistry
from .action_executor import ActionExecutor
from .action_tokens import sign_action, verify_action
from .context_service import ContextService, empty_context

logger = get_logger('supaco.assistant.chat')

CONFIRMATION_TEMPLATE = "I am going to **{description}**. Do you confirm this action?"
EMPTY_REPLY = "Sorry, I could not generate a response."


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def result_text(result: ActionResult) -> str:
    """Chat text shown after an action ran."""
    return f"{'✅' if result.success else '❌'} {result.message}"


class ChatService:
    """Conversation turn handler."""

    def __init__(
        self,
        config: Optional[AssistantConfig] = None,
        provider: Optional[BaseProvider] = None,
        context_service: Optional[ContextService] = None,
        executor: Optional[ActionExecutor] = None,
        registry: Optional[ToolRegistry] = None,
        secret_key: Optional[str] = None,
    ):
        self.config = config or get_config()
        self._provider = provider
        self._context_service = context_service
        if registry is None:
            from ..tools import tool_registry
            registry = tool_registry
        self.registry = registry
        self.executor = executor or ActionExecutor(registry)
        self.secret_key = secret_key

    # ── Lazy collaborators ──

    @property
    def provider(self) -> BaseProvider:
        if self._provider is None:
            try:
                self._provider = get_provider(self.config.PROVIDER)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        return self._provider

    @property
    def context_service(self) -> ContextService:
        if self._context_service is None:
            self._context_service = ContextService(config=self.config)
        return self._context_service

    # ── Turn handling ──

    def handle_turn(
        self,
        user_id: int,
        message: Optional[str],
        history: List[ConversationTurn],
        confirm_action: Optional[PendingAction] = None,
    ) -> ChatTurnResult:
        """
        Process one chat request.

        Args:
            user_id: Authenticated caller
            message: User message (ignored when confirm_action is given)
            history: Client-held transcript, oldest first
            confirm_action: Previously proposed action the user confirmed

        Returns:
            ChatTurnResult carrying the reply, the extended transcript and
            either a pending action or the executed action's result.

        Raises:
            ConfigurationError: provider credential missing
            LLMProviderError: provider call failed
            MalformedToolCallError: tool arguments are not a JSON object
            InvalidActionTokenError: confirmed action fails signature checks
        """
        if confirm_action is not None:
            result = self.execute_action(confirm_action, user_id)
            text = result_text(result)
            return ChatTurnResult(
                response=text,
                conversation_history=history + [ConversationTurn(MessageRole.ASSISTANT, text)],
                action_executed=result,
            )

        api_key = self.config.api_key
        if not api_key:
            raise ConfigurationError(f"{self.config.api_key_env or 'provider API key'} is not set")

        provider = self.provider
        context = self.context_service.get_user_context(user_id)
        messages = self.build_messages(context, history, message)

        response: LLMResponse = provider.generate(
            model_name=self.config.MODEL,
            messages=messages,
            max_tokens=self.config.MAX_TOKENS,
            temperature=self.config.TEMPERATURE,
            api_key=api_key,
            tools=provider.format_tool_schemas(self.registry.get_schemas()),
            tool_choice='auto',
        )
        log_with_context(
            logger, logging.INFO, "Chat turn completed",
            user_id=user_id, provider=provider.name, model=response.model,
            input_tokens=response.input_tokens, output_tokens=response.output_tokens,
            tool_calls=len(response.tool_calls),
        )

        user_turn = ConversationTurn(MessageRole.USER, message)

        if response.tool_calls:
            pending = self._pending_action(response.tool_calls, user_id)
            text = CONFIRMATION_TEMPLATE.format(description=pending.description)
            return ChatTurnResult(
                response=text,
                conversation_history=history + [user_turn, ConversationTurn(MessageRole.ASSISTANT, text)],
                pending_action=pending,
            )

        text = response.content or EMPTY_REPLY
        return ChatTurnResult(
            response=text,
            conversation_history=history + [user_turn, ConversationTurn(MessageRole.ASSISTANT, text)],
        )

    def execute_action(self, action: PendingAction, user_id: int) -> ActionResult:
        """Verify the action's token (when present or required) and run it.

        Raises:
            InvalidActionTokenError: token forged, expired, bound to another
                user, or absent while signed actions are required
        """
        if action.token:
            if not self.secret_key:
                raise InvalidActionTokenError("Action tokens cannot be verified without a secret key")
            verify_action(
                action.token, action.function, action.args, user_id,
                self.secret_key, self.config.ACTION_TOKEN_TTL,
            )
        elif self.config.REQUIRE_SIGNED_ACTIONS:
            raise InvalidActionTokenError("Unsigned action rejected")

        return self.executor.execute(action.function, action.args, user_id)

    # ── Prompt ──

    def build_system_prompt(self, context: Optional[Dict[str, Any]]) -> str:
        """Render the system prompt around a context snapshot (None renders empty sections)."""
        context = context or empty_context()
        limit = self.config.PROMPT_ITEM_LIMIT
        return SYSTEM_PROMPT_TEMPLATE.format(
            today=date.today().strftime(self.config.DATE_FORMAT),
            statistics=_to_json(context['statistics']),
            project_count=len(context['projects']),
            projects=_to_json(context['projects'][:limit]),
            prospect_count=len(context['prospects']),
            prospects=_to_json(context['prospects'][:limit]),
            deadlines=_to_json(context['upcoming_deadlines']),
            language=self.config.LANGUAGE,
        )

    def build_messages(
        self,
        context: Optional[Dict[str, Any]],
        history: List[ConversationTurn],
        message: str,
    ) -> List[Dict[str, str]]:
        """System prompt, the most recent history turns, then the new user message."""
        max_history = self.config.MAX_HISTORY_MESSAGES
        recent = history[-max_history:] if max_history > 0 else []
        return (
            [{'role': 'system', 'content': self.build_system_prompt(context)}]
            + [turn.to_dict() for turn in recent]
            + [{'role': 'user', 'content': message}]
        )

    # ── Tool calls ──

    def _pending_action(self, tool_calls: List[ToolCall], user_id: int) -> PendingAction:
        tool_call = tool_calls[0]
        if len(tool_calls) > 1:
            dropped = [tc.name for tc in tool_calls[1:]]
            logger.warning(f"Model returned {len(tool_calls)} tool calls; keeping {tool_call.name}, dropping {dropped}")

        args = parse_tool_arguments(tool_call)
        token = None
        if self.secret_key:
            token = sign_action(tool_call.name, args, user_id, self.secret_key)

        return PendingAction(
            function=tool_call.name,
            args=args,
            description=self.registry.describe(tool_call.name, args),
            token=token,
        )


def _parse_number(text: str):
    value = float(text)
    return int(value) if value.is_integer() else value


def parse_tool_arguments(tool_call: ToolCall) -> Dict[str, Any]:
    """Deserialize a tool call's arguments.

    Raises:
        MalformedToolCallError: if the payload is not a JSON object
    """
    try:
        args = json.loads(tool_call.arguments, parse_float=_parse_number)
    except (TypeError, ValueError) as e:
        raise MalformedToolCallError(tool_call.name, str(tool_call.arguments)) from e
    if not isinstance(args, dict):
        raise MalformedToolCallError(tool_call.name, str(tool_call.arguments))
    return args

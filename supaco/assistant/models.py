"""
Assistant Data Models

Data classes exchanged between the chat routes, the turn handler, the
providers and the action executor. None of them is persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Callable


class MessageRole(Enum):
    """Role of message sender."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass
class ConversationTurn:
    """One entry of the client-held transcript."""
    role: MessageRole
    content: str

    def __post_init__(self):
        """Convert string role to enum if needed."""
        if isinstance(self.role, str):
            self.role = MessageRole(self.role)

    @classmethod
    def from_dict(cls, data: Any) -> 'ConversationTurn':
        """Build a turn from client JSON.

        Raises:
            ValueError: if data is not {role, content} with a known role and string content
        """
        if not isinstance(data, dict):
            raise ValueError("Conversation turn must be an object")
        content = data.get('content')
        if not isinstance(content, str):
            raise ValueError("Conversation turn content must be a string")
        return cls(role=data.get('role'), content=content)

    def to_dict(self) -> Dict[str, str]:
        return {'role': self.role.value, 'content': self.content}


@dataclass
class ActionResult:
    """Outcome of one executed action."""
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'success': self.success, 'message': self.message, 'data': self.data}


@dataclass
class PendingAction:
    """A tool call proposed by the model and awaiting user confirmation."""
    function: str
    args: Dict[str, Any]
    description: str = ""
    token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'PendingAction':
        """Build from the {function, args, description?, token?} JSON echoed by the client.

        Raises:
            ValueError: if function or args are missing or of the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError("Invalid action")
        function = data.get('function')
        args = data.get('args')
        if not function or not isinstance(function, str) or not isinstance(args, dict):
            raise ValueError("Invalid action")
        return cls(
            function=function,
            args=args,
            description=data.get('description') or "",
            token=data.get('token'),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'function': self.function,
            'args': self.args,
            'description': self.description,
        }
        if self.token:
            result['token'] = self.token
        return result


ActionHandler = Callable[[Dict[str, Any], int], ActionResult]


@dataclass
class ToolDefinition:
    """A callable action offered to the model."""
    name: str
    description: str
    parameters: Dict[str, Any]
    handler: ActionHandler
    # str.format template over the call arguments, e.g. 'Create the project "{name}"'
    summary_template: Optional[str] = None

    @property
    def required(self) -> List[str]:
        return list(self.parameters.get('required', []))

    def to_schema(self) -> Dict[str, Any]:
        """Provider-neutral schema: name, description, JSON-schema parameters."""
        return {
            'name': self.name,
            'description': self.description,
            'parameters': self.parameters,
        }


@dataclass
class ToolCall:
    """A tool invocation returned by the model; arguments are still serialized."""
    id: Optional[str]
    name: str
    arguments: str


@dataclass
class LLMResponse:
    """Response from LLM provider."""
    content: str
    input_tokens: int
    output_tokens: int
    model: str
    finish_reason: Optional[str] = None
    tool_calls: List[ToolCall] = field(default_factory=list)


@dataclass
class ChatTurnResult:
    """What one /chat request returns to the client."""
    response: str
    conversation_history: List[ConversationTurn]
    pending_action: Optional[PendingAction] = None
    action_executed: Optional[ActionResult] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'response': self.response,
            'conversationHistory': [turn.to_dict() for turn in self.conversation_history],
        }
        if self.pending_action is not None:
            result['pendingAction'] = self.pending_action.to_dict()
        if self.action_executed is not None:
            result['actionExecuted'] = self.action_executed.to_dict()
        return result

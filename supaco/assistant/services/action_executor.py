"""
Action Executor

Runs the single mutation requested by a confirmed tool call. Every outcome,
including "not found" and database failures, comes back as an ActionResult;
nothing raises past execute().
"""

import logging
from typing import Any, Dict, Optional

from core.utils.logging_config import get_logger, log_with_context
from ..models import ActionResult
from ..tools.registry import ToolRegistry

logger = get_logger('supaco.assistant.executor')


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ActionExecutor:
    """Dispatch a tool name + arguments to the registered handler for one user."""

    def __init__(self, registry: Optional[ToolRegistry] = None):
        if registry is None:
            from ..tools import tool_registry
            registry = tool_registry
        self.registry = registry

    def execute(self, function_name: str, args: Dict[str, Any], user_id: int) -> ActionResult:
        """
        Execute an action on behalf of user_id.

        Args:
            function_name: Tool name from the catalog
            args: Tool arguments as sent by the model (and echoed by the client)
            user_id: Authenticated caller; every lookup and write is scoped to it

        Returns:
            ActionResult. success=False for unknown tools, missing required
            arguments, unresolved entities and store failures.
        """
        tool = self.registry.get(function_name)
        if tool is None:
            logger.warning(f"Unknown action requested: {function_name!r} (user={user_id})")
            return ActionResult(success=False, message=f'Action "{function_name}" not recognized')

        args = args if isinstance(args, dict) else {}
        missing = [name for name in tool.required if _is_blank(args.get(name))]
        if missing:
            return ActionResult(
                success=False,
                message=f'Missing required field(s): {", ".join(missing)}',
            )

        try:
            result = tool.handler(args, user_id)
        except Exception as e:
            logger.exception(f"Action {function_name} failed for user {user_id}")
            return ActionResult(success=False, message=f'Error while executing the action: {e}')

        log_with_context(
            logger, logging.INFO, f"Action {function_name} executed",
            user_id=user_id, success=result.success,
        )
        return result

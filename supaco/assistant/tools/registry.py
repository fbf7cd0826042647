"""Tool registry: the fixed catalog of actions the assistant may propose."""

import logging
from typing import Any, Dict, List, Optional

from ..models import ToolDefinition, ActionHandler

logger = logging.getLogger('supaco.assistant.tools.registry')


class _MissingArgs(dict):
    """format_map() mapping that renders absent arguments as '?'."""

    def __missing__(self, key):
        return '?'


class ToolRegistry:
    """Name → ToolDefinition catalog, in registration order."""

    def __init__(self):
        self._tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name: str,
        description: str,
        parameters: Dict[str, Any],
        handler: ActionHandler,
        summary: Optional[str] = None,
    ) -> ToolDefinition:
        """Register (or replace) a tool.

        Args:
            name: Tool name the model calls
            description: Natural-language description shown to the model
            parameters: JSON schema object with 'properties' and 'required'
            handler: Callable (args, user_id) -> ActionResult
            summary: One-line confirmation template over the call arguments
        """
        if name in self._tools:
            logger.debug(f"Tool '{name}' re-registered")
        tool = ToolDefinition(
            name=name,
            description=description,
            parameters=parameters,
            handler=handler,
            summary_template=summary,
        )
        self._tools[name] = tool
        return tool

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    @property
    def tool_count(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def get_schemas(self) -> List[Dict[str, Any]]:
        """Provider-neutral schemas for every registered tool."""
        return [tool.to_schema() for tool in self._tools.values()]

    def describe(self, name: str, args: Dict[str, Any]) -> str:
        """Human-readable one-line summary of a proposed call."""
        tool = self._tools.get(name)
        if tool is None or not tool.summary_template:
            return f"Run {name}"
        return tool.summary_template.format_map(_MissingArgs(args or {}))


tool_registry = ToolRegistry()

"""Assistant tool catalog."""

from .registry import ToolRegistry, tool_registry
from . import definitions  # noqa: F401

__all__ = ['ToolRegistry', 'tool_registry']

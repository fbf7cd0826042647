"""Tool definitions: register all built-in actions on import."""

from . import projects  # noqa: F401
from . import prospects  # noqa: F401

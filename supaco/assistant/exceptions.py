"""
Assistant Custom Exceptions

"Not found" and "nothing to do" outcomes of an action are not exceptions;
they come back as an ActionResult with success=False.
"""


class AssistantError(Exception):
    """Base exception for the assistant module."""
    pass


class ConfigurationError(AssistantError):
    """Raised when configuration is invalid or missing."""
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")


class LLMProviderError(AssistantError):
    """Base exception for LLM provider errors."""
    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class LLMAuthenticationError(LLMProviderError):
    """Raised when the provider rejects the API key."""
    def __init__(self, provider: str, detail: str = None):
        msg = "Authentication failed - check API key"
        if detail:
            msg += f": {detail}"
        super().__init__(provider, msg)


class LLMRateLimitError(LLMProviderError):
    """Raised when the provider rate limit is exceeded."""
    def __init__(self, provider: str, retry_after: int = None):
        self.retry_after = retry_after
        msg = "Rate limit exceeded"
        if retry_after:
            msg += f" - retry after {retry_after} seconds"
        super().__init__(provider, msg)


class MalformedToolCallError(AssistantError):
    """Raised when the model returns tool arguments that cannot be deserialized."""
    def __init__(self, tool_name: str, raw_arguments: str):
        self.tool_name = tool_name
        self.raw_arguments = raw_arguments
        super().__init__(
            f"Could not parse arguments for tool '{tool_name}': {raw_arguments[:200]!r}"
        )


class InvalidActionTokenError(AssistantError):
    """Raised when a pending action's signature is missing, forged or expired."""
    pass

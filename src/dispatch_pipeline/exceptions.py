"""Custom exceptions raised by the dispatch pipeline."""


class DispatchPipelineError(RuntimeError):
    """Base error for all dispatch pipeline exceptions."""


class ConfigurationError(DispatchPipelineError):
    """Raised when pipeline settings are invalid or missing."""


class UnknownInterceptorError(ConfigurationError):
    """Raised when an interceptor name cannot be resolved."""


class InvalidActionError(DispatchPipelineError):
    """Raised when a store receives an action without a type tag."""


class DispatchInProgressError(DispatchPipelineError):
    """Raised when dispatch is invoked while a reducer is still running."""


class MiddlewareConstructionError(DispatchPipelineError):
    """Raised when an interceptor dispatches before the chain is built."""

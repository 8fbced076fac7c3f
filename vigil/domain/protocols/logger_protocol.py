"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging. Implementations MUST keep logs
structured (key-value context) and safe.

Context Binding:
    Use bind() to create request-scoped loggers with permanent context
    (correlation_id, principal_id) included in every subsequent log.

Security:
    - NEVER log passwords, TOTP secrets, backup codes or reset tokens
    - Login keys are logged only where an audit trail requires them

Usage:
    from vigil.core.container import get_logger

    logger = get_logger()
    logger.info("login_failed", principal_id=str(principal_id))

    request_logger = logger.bind(correlation_id=context.correlation_id)
    request_logger.info("risk_assessment_completed", score=42)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Event names are snake_case (``login_failed``, ``risk_signal_unavailable``);
    everything else goes in keyword context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message (degraded but continuing)."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for failures needing immediate attention."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger is unchanged (immutable pattern).
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...

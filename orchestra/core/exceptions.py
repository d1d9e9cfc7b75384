"""Custom exceptions for Orchestra."""

from typing import Any


class OrchestraError(Exception):
    """Base exception for all Orchestra errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(OrchestraError):
    """Raised when there's a configuration problem."""

    pass


class ProviderNotFoundError(OrchestraError):
    """Raised when a provider name is not registered."""

    def __init__(
        self,
        provider: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.provider = provider
        super().__init__(
            f"Provider {provider} not found",
            details={**(details or {}), "provider": provider},
        )


class NoProvidersError(OrchestraError):
    """Raised when consensus or debate resolves an empty provider set."""

    def __init__(self, message: str = "No providers available for consensus") -> None:
        super().__init__(message)


class ProviderCallError(OrchestraError):
    """Raised when a provider's completion call fails."""

    def __init__(
        self,
        provider: str,
        cause: BaseException,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.provider = provider
        self.cause = cause
        super().__init__(
            f"Provider {provider} failed: {cause}",
            details={
                **(details or {}),
                "provider": provider,
                "error_type": type(cause).__name__,
            },
        )


class ProviderAPIError(OrchestraError):
    """Raised when a provider's upstream API call fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        model: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.provider = provider
        self.model = model
        self.status_code = status_code
        super().__init__(
            message,
            details={
                **(details or {}),
                "provider": provider,
                "model": model,
                "status_code": status_code,
            },
        )


class OrchestraTimeoutError(OrchestraError, TimeoutError):
    """Raised when a caller-level timeout elapses."""

    def __init__(self, operation: str, timeout_ms: float) -> None:
        self.operation = operation
        self.timeout_ms = timeout_ms
        super().__init__(
            f"{operation} timed out after {timeout_ms:g}ms",
            details={"operation": operation, "timeout_ms": timeout_ms},
        )

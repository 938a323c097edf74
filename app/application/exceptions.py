class FormFlowError(RuntimeError):
    """Base class for failures inside the invoice form flow."""
    pass


class DecodeFailure(FormFlowError):
    """Raised when a stage token is malformed, foreign or expired."""
    pass


class ValidationFailure(FormFlowError):
    """Raised when a submitted field violates a length or format constraint."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class UpstreamError(FormFlowError):
    """Raised when an outbound call fails (network errors, unreadable responses)."""
    pass


class UpstreamTimeout(UpstreamError):
    """Raised when an outbound call exceeds its configured timeout."""
    pass


class UpstreamRejected(UpstreamError):
    """Raised when an outbound call returns a non-success status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Upstream responded with status {status_code}")
        self.status_code = status_code


class InternalFailure(FormFlowError):
    """Raised when merging or derivation fails for any other reason."""
    pass


class BusinessDayScanExhausted(InternalFailure):
    """Raised when no business day is found within the scan bound."""
    pass


class UnsupportedInteraction(FormFlowError):
    """Raised when an interaction does not belong to any known flow."""
    pass

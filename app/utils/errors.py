class ProviderError(Exception):
    """Base class for failures reported by an upstream provider client."""


class ProviderRejected(ProviderError):
    """The provider answered, but with an error status."""

    def __init__(self, status: int, message: str):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class TransportFailure(ProviderError):
    """The provider could not be reached or its reply could not be read."""

    def __init__(self, cause: Exception):
        super().__init__(str(cause))
        self.cause = cause


def describe_provider_error(err: Exception, fallback: str) -> str:
    if isinstance(err, ProviderRejected):
        return f"Twilio API Error ({err.status}): {err.message}"
    if isinstance(err, TransportFailure):
        return f"Server Error: {err.cause}"
    return fallback

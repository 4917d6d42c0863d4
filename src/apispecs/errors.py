"""
api-specs error hierarchy

Per-request failures derive from ExecutionError and are skipped by the
runner. Everything else is fatal to the run.
"""


class ApiSpecsError(Exception):
    """Base class for all api-specs errors."""


class IoError(ApiSpecsError, OSError):
    """Input or output file missing, unreadable or unwritable."""


class ParseError(ApiSpecsError, ValueError):
    """Malformed collection, environment or HAR document."""


class SerializationError(ApiSpecsError):
    """Output document could not be encoded."""


class ExecutionError(ApiSpecsError):
    """A single request could not be executed."""


class UnsupportedRequestForm(ExecutionError):
    """Request item uses the bare-string form (URL only)."""


class UnsupportedMethod(ExecutionError):
    """HTTP method outside the supported set."""

    def __init__(self, method: str):
        super().__init__(f"Unsupported method: {method}")
        self.method = method


class TransportError(ExecutionError):
    """DNS, connect, TLS or read failure while talking to the server."""

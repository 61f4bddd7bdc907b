"""
Exception hierarchy for the server-status client.

Every failure of a single ping surfaces as a subclass of PingError so callers
can catch one type and still branch on the specific cause:

    PingError
    ├── SrvResolutionFailed
    ├── HostResolutionFailed
    ├── ConnectFailed
    ├── ConnectTimeout
    ├── ProtocolError
    ├── EncodingError
    │   ├── VarIntTooLong
    │   ├── StringTooLong
    │   ├── UnexpectedEof
    │   └── InvalidEncoding
    └── JsonError
"""


class PingError(Exception):
    """Base class for all errors raised while pinging a server."""


class SrvResolutionFailed(PingError):
    """The SRV query succeeded but returned no usable record."""


class HostResolutionFailed(PingError):
    """Forward address resolution failed or returned no addresses."""


class ConnectFailed(PingError):
    """The TCP connection was refused, reset or unreachable."""

    def __init__(self, message: str, cause: OSError | None = None):
        super().__init__(message)
        self.cause = cause


class ConnectTimeout(PingError):
    """The server did not accept the connection within the timeout."""


class ProtocolError(PingError):
    """The server sent something that is not a valid status response."""


class EncodingError(PingError):
    """A wire value could not be encoded or decoded."""


class VarIntTooLong(EncodingError):
    """A VarInt/VarLong ran past its maximum byte length."""


class StringTooLong(EncodingError):
    """A string exceeds the protocol's UTF-16 length ceiling."""


class UnexpectedEof(EncodingError):
    """A read went past the end of the buffer."""


class InvalidEncoding(EncodingError):
    """A decoded string is not valid UTF-8."""


class JsonError(PingError):
    """The status payload is not valid JSON or has an unexpected shape."""

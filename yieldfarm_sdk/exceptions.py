"""
Exceptions for the yield-farming SDK.

Every failure surfaced by the client belongs to one of four kinds, so callers
can branch on ``exc.kind`` or on the exception class.
"""
from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds raised by the client."""
    CONFIGURATION = "CONFIGURATION"
    INVOCATION = "INVOCATION"
    QUERY = "QUERY"
    LOOKUP = "LOOKUP"


class YieldFarmError(Exception):
    """Base exception for all SDK errors."""
    kind: ErrorKind


class ConfigurationError(YieldFarmError):
    """Raised when the endpoint, address, ABI or signer given to the client is invalid."""
    kind = ErrorKind.CONFIGURATION


class InvocationError(YieldFarmError):
    """Raised when a state-mutating call cannot be submitted."""
    kind = ErrorKind.INVOCATION


class QueryError(YieldFarmError):
    """Raised when a read-only call fails or its result cannot be decoded."""
    kind = ErrorKind.QUERY


class ChainLookupError(YieldFarmError, LookupError):
    """Raised when a receipt or block lookup fails at the transport level."""
    kind = ErrorKind.LOOKUP

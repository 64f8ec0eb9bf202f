"""
Custom exceptions for the request client.
"""

class RequestClientError(Exception):
    """Base exception for all request client errors."""
    pass

class InvalidUrlError(RequestClientError):
    """Raised when a request URL fails validation."""
    pass

class RequestTimeoutError(RequestClientError):
    """Raised when a request does not complete within its timeout."""
    pass

class RequestExecutionError(RequestClientError):
    """Raised when a request fails at the transport level."""
    pass

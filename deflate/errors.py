from __future__ import annotations


class DeflateError(Exception):
    """Base class for errors raised by the Deflate SDK."""


class AuthenticationError(DeflateError):
    """The account check made while constructing a client did not succeed.

    Rejected credentials and an unreachable API look the same from here.
    """


class ConfigurationError(DeflateError, ValueError):
    """The caller supplied arguments or settings the client cannot use."""

"""Errors raised when the validity of a signature cannot be determined.

A signature that is simply not accepted is never an error: it is reported
as ``False`` by :meth:`erc1271.validator.Validator.validate`.
"""

from typing import Optional


class ValidatorError(Exception):
    """Base class for erc1271 errors."""


class TransportError(ValidatorError):
    """The RPC node could not be reached or refused the request."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address


class InvalidInputError(ValidatorError, ValueError):
    """An address, signature or magic value could not be decoded."""

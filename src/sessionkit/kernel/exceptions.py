"""Unified exception hierarchy for sessionkit.

All library exceptions inherit from SessionKitException, enabling unified
error handling across modules.

Categories:
- BusinessException: Rule violations, invalid input
- InfrastructureException: Storage backend and codec failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class SessionKitException(Exception):
    """Base exception for all sessionkit errors.

    Carries an optional error code and context dict for structured error data.
    Catch SessionKitException to handle every library error, or catch
    specific subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SESSION_DECODE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(SessionKitException):
    """Rule violations and invalid caller input."""


class ValidationException(BusinessException):
    """Input validation failures."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(SessionKitException):
    """Infrastructure failures: storage backends, encoders, configuration."""

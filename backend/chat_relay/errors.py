"""Error types raised by the relay and helpers for mapping them to responses."""

from typing import Optional, Tuple

import openai

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


class ChatRelayError(Exception):
    """Base class for errors raised by this package."""


class FetchError(ChatRelayError):
    """The remote image could not be fetched."""


class SignError(ChatRelayError):
    """A signed URL could not be generated for an uploaded object."""


class ServiceAccountError(ChatRelayError):
    """The Firebase service account file is missing or not valid JSON."""


def provider_error_details(exc: BaseException) -> Optional[Tuple[int, str]]:
    """Return ``(status, message)`` when ``exc`` carries an upstream provider error.

    The OpenAI SDK raises ``APIStatusError`` subclasses for non-2xx replies. The
    parsed ``error`` object of the reply body is exposed as ``exc.body``.
    """
    if not isinstance(exc, openai.APIStatusError):
        return None
    body = exc.body
    message = None
    if isinstance(body, dict):
        message = body.get("message")
    if not message:
        message = exc.message or UNKNOWN_ERROR_MESSAGE
    return exc.status_code or 500, message


def error_response_details(exc: BaseException) -> Tuple[int, str]:
    details = provider_error_details(exc)
    if details is None:
        return 500, UNKNOWN_ERROR_MESSAGE
    return details

"""Generator failure types and upstream error classification.

Every failure raised by :mod:`craftai.core.generator` is one of three kinds:

- :class:`InvalidCredentialError`: the Gemini API rejected the API key.
- :class:`ServiceOverloadedError`: the model is temporarily unavailable.
  Carries a ``retry_after`` hint in seconds.
- :class:`GeneratorError`: anything else (bad response, network failure,
  unexpected upstream status).

:func:`classify_upstream_error` turns an arbitrary exception coming out of the
``google-genai`` SDK into one of these.  It reads the ``code`` and ``message``
attributes that ``google.genai.errors.APIError`` exposes and falls back to the
exception text, so transport errors without those attributes still classify.
"""

from __future__ import annotations

import re

DEFAULT_RETRY_AFTER_SECONDS = 30

_INVALID_KEY_PATTERN = re.compile(r"API key not valid|API_KEY_INVALID|invalid api key", re.IGNORECASE)
_OVERLOAD_PATTERN = re.compile(r"overloaded|\b503\b|UNAVAILABLE", re.IGNORECASE)


class GeneratorError(Exception):
    """A generator call failed for a reason with no dedicated mapping."""


class InvalidCredentialError(GeneratorError):
    """The configured Gemini API key is missing or was rejected."""


class ServiceOverloadedError(GeneratorError):
    """The upstream model is overloaded; the caller may retry later."""

    def __init__(self, message: str = "", retry_after: int = DEFAULT_RETRY_AFTER_SECONDS):
        super().__init__(message)
        self.retry_after = retry_after


def classify_upstream_error(exc: BaseException) -> GeneratorError:
    """Map an exception raised during a generator call onto a GeneratorError.

    Already-classified errors are returned unchanged.

    Args:
        exc: The exception raised by the SDK or by response parsing.

    Returns:
        A :class:`GeneratorError` (or subclass) wrapping *exc*.
    """
    if isinstance(exc, GeneratorError):
        return exc

    code = getattr(exc, "code", None)
    message = getattr(exc, "message", None) or str(exc)
    text = f"{message} {exc}"

    if code in (401, 403) or (code in (400, None) and _INVALID_KEY_PATTERN.search(text)):
        error: GeneratorError = InvalidCredentialError(message)
    elif code == 503 or _OVERLOAD_PATTERN.search(text):
        error = ServiceOverloadedError(message)
    else:
        error = GeneratorError(message)

    error.__cause__ = exc
    return error

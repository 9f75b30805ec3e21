"""Translation of generator failures into HTTP errors.

Route handlers catch :class:`~craftai.core.errors.GeneratorError` and raise
the :class:`HTTPException` built here:

=================================  ======  ==================================
Failure                            Status  Body / headers
=================================  ======  ==================================
InvalidCredentialError             401     fixed "invalid key" message
ServiceOverloadedError             503     ``Retry-After`` header
any other GeneratorError           500     endpoint-specific generic message
=================================  ======  ==================================
"""

from __future__ import annotations

from fastapi import HTTPException

from craftai.core.errors import GeneratorError, InvalidCredentialError, ServiceOverloadedError

INVALID_KEY_MESSAGE = "Invalid Gemini API key. Update GEMINI_API_KEY and restart the server."
OVERLOADED_MESSAGE = "AI service is temporarily overloaded. Please try again in a moment."


class OverloadedHTTPException(HTTPException):
    """503 response that also reports the retry delay in the JSON body."""

    def __init__(self, retry_after: int):
        super().__init__(
            status_code=503,
            detail=OVERLOADED_MESSAGE,
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after


def generator_http_error(exc: GeneratorError, fallback_message: str) -> HTTPException:
    """Build the HTTP error for a failed generator call.

    Args:
        exc: The classified generator failure.
        fallback_message: Message used for unclassified failures.

    Returns:
        The exception to raise from the route handler.
    """
    if isinstance(exc, InvalidCredentialError):
        return HTTPException(status_code=401, detail=INVALID_KEY_MESSAGE)
    if isinstance(exc, ServiceOverloadedError):
        return OverloadedHTTPException(exc.retry_after)
    return HTTPException(status_code=500, detail=fallback_message)

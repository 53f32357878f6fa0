"""Shared HTTP response helpers for check envelopes."""

from fastapi import status
from fastapi.responses import JSONResponse

from archetype.domain import CheckEnvelope


def api_envelope_response(envelope: CheckEnvelope) -> JSONResponse:
    """Render a check envelope as HTTP 200 on success or 503 on failure.

    Args:
        envelope: Check runner outcome.

    Returns:
        JSONResponse: Envelope payload with the matching status code.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    status_code = status.HTTP_200_OK if envelope.envelope_is_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=envelope.envelope_to_payload(), status_code=status_code)

"""Helpers for reading error details from backend responses."""

import httpx


def response_message(response: httpx.Response) -> str | None:
    """Return the backend's human-readable ``message`` field, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None

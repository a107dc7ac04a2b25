"""Request type identifiers.

Assigned to a request when it passes validation, and used by the executor
to classify the request. ApiId.NONE means "not validated yet".
"""

from __future__ import annotations

__all__ = ["ApiId"]

from enum import IntEnum


class ApiId(IntEnum):
    """Identifier of the kind of token request being executed."""

    NONE = 0
    ACQUIRE_TOKEN_SILENT_WITHOUT_AUTHORITY = 30
    ACQUIRE_TOKEN_SILENT_WITH_AUTHORITY = 31

"""Parsing of extra query parameter strings.

Older callers pass extra query parameters as a single query string
("slice=testslice&dc=ESTS-PUB-WUS2-AZ1"). This is parsed into the mapping
form used by the request builders.
"""

from __future__ import annotations

__all__ = ["parse_key_value_list"]

from urllib.parse import parse_qsl


def parse_key_value_list(raw: str | None, delimiter: str = "&") -> dict[str, str]:
    """Parse "key=value" pairs separated by ``delimiter``.

    Keys and values are URL-decoded and stripped. Pairs without a key are
    dropped; a key without "=" maps to an empty string. A repeated key keeps
    its last value.

    Args:
        raw: The raw query string. None or blank yields an empty dict.
        delimiter: Separator between pairs.

    Returns:
        dict[str, str]: Parsed parameters in input order.
    """
    if raw is None or not raw.strip():
        return {}

    result: dict[str, str] = {}
    for key, value in parse_qsl(raw.strip().lstrip("?"), keep_blank_values=True, separator=delimiter):
        key = key.strip()
        if key:
            result[key] = value.strip()
    return result

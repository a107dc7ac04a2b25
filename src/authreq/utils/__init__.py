"""Shared helpers for authreq (query strings, log formatting, config files)."""

from authreq.utils.file_helpers import load_validated_json, require_file_exists, set_secure_permissions
from authreq.utils.iso_formatter import ISO8601Formatter
from authreq.utils.query_params import parse_key_value_list

__all__ = [
    "ISO8601Formatter",
    "load_validated_json",
    "parse_key_value_list",
    "require_file_exists",
    "set_secure_permissions",
]

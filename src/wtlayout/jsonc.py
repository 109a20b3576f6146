"""Lenient JSON decoding for the files Windows Terminal writes."""

from __future__ import annotations

import json
import re
from typing import Any

_STRING = r'"(?:\\.|[^"\\])*"?'
_COMMENT_PATTERN = re.compile(_STRING + r"|//[^\n]*|/\*.*?(?:\*/|\Z)", re.DOTALL)
_TRAILING_COMMA_PATTERN = re.compile(_STRING + r"|,(?=\s*[}\]])", re.DOTALL)


def _keep_strings(match: re.Match[str]) -> str:
    token = match.group(0)
    return token if token.startswith('"') else ""


def strip_jsonc_comments(raw: str) -> str:
    """Remove // and /* */ comments while preserving JSON strings."""
    return _COMMENT_PATTERN.sub(_keep_strings, raw)


def fix_json_trailing_commas(raw: str) -> str:
    """Remove commas that directly precede a closing brace or bracket."""
    return _TRAILING_COMMA_PATTERN.sub(_keep_strings, raw)


def load_jsonc(raw: str) -> Any:
    """Decode JSON that may carry comments, trailing commas or a BOM.

    Raises ``json.JSONDecodeError`` when the cleaned text is still not JSON.
    """
    return json.loads(fix_json_trailing_commas(strip_jsonc_comments(raw.lstrip("\ufeff"))))

"""Shared utility functions for the fit engine's I/O edges."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

# JSON allows \t \n \r; any other C0 control character breaks parsing
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")


def clean_json_content(content: str) -> str:
    """
    Clean JSON text produced by the rewrite service.

    The service sometimes wraps JSON in ```json fences, leaves stray control
    characters, or appends commentary after the object. This removes the
    fences and control characters and, when the whole text does not parse,
    returns the first complete JSON object or array found in it.

    Args:
        content: Raw text

    Returns:
        Cleaned text; if no valid JSON is found, the cleaned text as-is so the
        caller's parser reports the error
    """
    content = content.strip()

    if content.startswith("```"):
        lines = content.split("\n")[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        content = "\n".join(lines)

    content = _CONTROL_CHARS_RE.sub(" ", content).strip()

    try:
        json.loads(content)
        return content
    except json.JSONDecodeError:
        pass

    decoder = json.JSONDecoder()
    for start_char in ("{", "["):
        start_idx = content.find(start_char)
        if start_idx == -1:
            continue
        try:
            _, end_idx = decoder.raw_decode(content, start_idx)
        except json.JSONDecodeError:
            continue
        return content[start_idx:end_idx]

    return content


def write_json(path: Path, data: Any) -> Path:
    """Write ``data`` as indented UTF-8 JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return path

"""
Resume JSON loading with safe defaults.

RESPONSIBILITY: runtime consumer safety
- Load resume JSON from disk with error handling
- Accept both a bare resume and the rewrite service's result wrapper
- Return an empty resume on errors (never crash the caller)

Validation of individual fields is lenient and lives in ``schema``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from rattle_fit.schema import StructuredResume, coerce_resume
from rattle_fit.utils import clean_json_content

logger = logging.getLogger(__name__)

# Key the rewrite service nests the resume under
RESULT_WRAPPER_KEY = "structuredResume"


def load_resume_payload(file_path: Path) -> Dict[str, Any]:
    """
    Load the raw resume mapping from a JSON file.

    Schema: either a StructuredResume object, or
            {structuredResume: StructuredResume, originalText?, suggestions?, ...}
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.loads(clean_json_content(f.read()))
    except FileNotFoundError:
        logger.error(f"Resume file not found: {file_path}")
        return {}
    except json.JSONDecodeError as e:
        logger.error(f"{Path(file_path).name}: Invalid JSON - {e}")
        return {}
    except OSError as e:
        logger.error(f"{Path(file_path).name}: Error reading file - {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"{Path(file_path).name}: expected a JSON object, got {type(data).__name__}")
        return {}

    wrapped = data.get(RESULT_WRAPPER_KEY)
    if isinstance(wrapped, dict):
        return wrapped

    if "experience" not in data:
        logger.warning(f"{Path(file_path).name} missing 'experience' field")
    return data


def load_resume(file_path: Path) -> StructuredResume:
    """Load a resume file; anything unreadable yields an empty resume."""
    return coerce_resume(load_resume_payload(file_path))

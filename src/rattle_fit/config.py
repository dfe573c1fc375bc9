"""
Fit policy configuration.

Policies live in YAML (``policies/fit_policies.yaml`` by default) as named
profiles. Loading validates them through the pydantic models, including the
ladder ordering rules, and reports any problem as a FitConfigError.

Environment:
    RATTLE_FIT_POLICY_FILE  alternative policy file
    RATTLE_FIT_PROFILE      profile to load when none is requested
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from rattle_fit.fit_settings import DEFAULT_FIT_SETTINGS, FitPolicy
from rattle_fit.logger import get_logger
from rattle_fit.paths import DEFAULT_POLICY_FILE

logger = get_logger("config")

FALLBACK_PROFILE = "screen"


class FitConfigError(ValueError):
    """Raised when a fit policy file or profile cannot be used."""


def _policy_file(path: Optional[str | Path]) -> Path:
    if path:
        return Path(path)
    env_path = os.getenv("RATTLE_FIT_POLICY_FILE")
    return Path(env_path) if env_path else DEFAULT_POLICY_FILE


def load_policy_document(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Read and sanity-check the raw YAML document."""
    policy_file = _policy_file(path)
    try:
        document = yaml.safe_load(policy_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise FitConfigError(f"Fit policy file not found: {policy_file}") from None
    except yaml.YAMLError as e:
        raise FitConfigError(f"Invalid YAML in {policy_file}: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get("profiles"), dict):
        raise FitConfigError(f"{policy_file} must contain a 'profiles' mapping")
    return document


def available_profiles(path: Optional[str | Path] = None) -> List[str]:
    return sorted(load_policy_document(path)["profiles"])


def load_fit_policy(path: Optional[str | Path] = None, profile: Optional[str] = None) -> FitPolicy:
    """
    Load one fit policy profile.

    Args:
        path: Policy YAML file (defaults to RATTLE_FIT_POLICY_FILE or the
            packaged fit_policies.yaml)
        profile: Profile name (defaults to RATTLE_FIT_PROFILE, then the
            document's default_profile)

    Returns:
        Validated FitPolicy

    Raises:
        FitConfigError: If the file is missing or malformed, the profile is
            unknown, or its values or ladder are invalid
    """
    document = load_policy_document(path)
    profiles = document["profiles"]
    name = profile or os.getenv("RATTLE_FIT_PROFILE") or document.get("default_profile") or FALLBACK_PROFILE

    entry = profiles.get(name)
    if not isinstance(entry, dict):
        raise FitConfigError(f"Unknown fit profile '{name}' (available: {', '.join(sorted(profiles))})")

    overrides = entry.get("defaults") or {}
    if not isinstance(overrides, dict):
        raise FitConfigError(f"Profile '{name}' defaults must be a mapping in {_policy_file(path)}")

    # Partial defaults inherit the built-in values
    defaults = {**DEFAULT_FIT_SETTINGS.model_dump(), **overrides}
    try:
        policy = FitPolicy.model_validate({**entry, "name": name, "defaults": defaults})
    except ValidationError as e:
        raise FitConfigError(f"Invalid fit profile '{name}' in {_policy_file(path)}: {e}") from e

    logger.debug(f"Loaded fit profile '{name}' with {policy.max_compression_level} compression steps")
    return policy

"""Resolve the live git identity back to a configured profile."""

import logging
from pathlib import Path

from . import git
from .config import Config
from .git import ConfigScope

logger = logging.getLogger(__name__)


def get_current_identity(path: Path | None = None) -> tuple[str | None, str | None]:
    """Get the effective (name, email), local config first then global."""
    name, email = git.get_current_user(ConfigScope.LOCAL, path)
    if name is None and email is None:
        name, email = git.get_current_user(ConfigScope.GLOBAL, path)
    return name, email


def find_profile_by_identity(config: Config, name: str | None, email: str | None) -> str | None:
    """Find the profile whose name and email both match exactly.

    If two profiles share the same pair the first in name order wins.
    """
    if name is None or email is None:
        return None
    for profile_name in config.profile_names():
        profile = config.profiles[profile_name]
        if profile.name == name and profile.email == email:
            return profile_name
    return None


def get_current_profile(config: Config, path: Path | None = None) -> str | None:
    """Get the current profile name based on git config."""
    name, email = get_current_identity(path)
    profile_name = find_profile_by_identity(config, name, email)
    logger.debug(f"Current identity {name} <{email}> -> {profile_name}")
    return profile_name

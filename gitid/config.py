"""Profile store for gitid, persisted as TOML."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import toml

from .exceptions import ConfigError, GitidError, ProfileError
from .files import atomic_write_text
from .profile import Profile

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"

# Profile names become SSH Host aliases and TOML table keys
PROFILE_NAME_PATTERN = re.compile(r"[A-Za-z0-9._-]+")


def validate_profile_name(name: str) -> None:
    """Raise ProfileError unless name is usable as a profile name."""
    if not name.strip():
        raise ProfileError("Profile name cannot be empty")
    if not PROFILE_NAME_PATTERN.fullmatch(name):
        raise ProfileError(
            f"Invalid profile name: {name}",
            details="Use only letters, digits, '.', '_' and '-'",
        )


def config_dir() -> Path:
    """Get the gitid configuration directory.

    ``GITID_CONFIG_DIR`` wins, then ``$XDG_CONFIG_HOME/gitid``, then
    ``~/.config/gitid``.
    """
    override = os.environ.get("GITID_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "gitid"


def config_path() -> Path:
    """Get the config file path."""
    return config_dir() / CONFIG_FILENAME


@dataclass
class Config:
    """All configured profiles plus the optional default profile."""
    default_profile: str | None = None
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load config from disk. Returns an empty Config if the file doesn't exist."""
        path = path or config_path()
        if not path.exists():
            logger.debug(f"No config at {path}, starting empty")
            return cls()

        try:
            data = toml.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read config file: {path}", details=str(e)) from e
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Failed to parse config file: {path}", details=str(e)) from e

        return cls.from_dict(data, source=path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | None = None) -> "Config":
        """Build a Config from parsed TOML data."""
        profiles: dict[str, Profile] = {}
        for name, profile_data in (data.get("profiles") or {}).items():
            try:
                profiles[name] = Profile.from_dict(profile_data)
            except (GitidError, TypeError, AttributeError) as e:
                raise ConfigError(
                    f"Invalid profile '{name}' in {source or 'config'}",
                    details=str(e),
                ) from e

        default_profile = data.get("default_profile") or None
        if default_profile and default_profile not in profiles:
            logger.warning(f"Default profile '{default_profile}' does not exist, ignoring it")
            default_profile = None

        return cls(default_profile=default_profile, profiles=profiles)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        data: dict[str, Any] = {}
        if self.default_profile:
            data["default_profile"] = self.default_profile
        data["profiles"] = {
            name: self.profiles[name].to_dict() for name in self.profile_names()
        }
        return data

    def save(self, path: Path | None = None) -> None:
        """Save config to disk."""
        path = path or config_path()
        try:
            atomic_write_text(path, toml.dumps(self.to_dict()))
        except OSError as e:
            raise ConfigError(f"Failed to write config file: {path}", details=str(e)) from e
        logger.debug(f"Saved {len(self.profiles)} profile(s) to {path}")

    @classmethod
    def init(cls, path: Path | None = None) -> bool:
        """Create an empty config file if none exists.

        Returns:
            True if a new file was created
        """
        path = path or config_path()
        if path.exists():
            return False
        cls().save(path)
        return True

    def add_profile(self, name: str, profile: Profile) -> None:
        """Validate and store a profile, replacing any profile with that name."""
        validate_profile_name(name)
        profile.validate()
        self.profiles[name] = profile

    def remove_profile(self, name: str) -> Profile | None:
        """Remove a profile, clearing the default if it pointed at it."""
        if self.default_profile == name:
            self.default_profile = None
        return self.profiles.pop(name, None)

    def get_profile(self, name: str) -> Profile | None:
        return self.profiles.get(name)

    def require_profile(self, name: str) -> Profile:
        """Get a profile by name.

        Raises:
            ProfileError: If the profile does not exist
        """
        profile = self.profiles.get(name)
        if profile is None:
            raise ProfileError(f"Profile '{name}' not found", profile_name=name)
        return profile

    def has_profile(self, name: str) -> bool:
        return name in self.profiles

    def profile_names(self) -> list[str]:
        """All profile names sorted alphabetically."""
        return sorted(self.profiles)

    def set_default(self, name: str | None) -> None:
        """Set or clear the default profile."""
        if name is not None:
            self.require_profile(name)
        self.default_profile = name

"""Profile model for gitid."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .exceptions import ProfileError


class Platform(Enum):
    """Supported Git hosting platforms."""
    GITHUB = auto()
    GITLAB = auto()
    BOTH = auto()

    @classmethod
    def from_str(cls, value: str) -> "Platform":
        """Convert string to platform."""
        mapping = {
            "github": cls.GITHUB,
            "gitlab": cls.GITLAB,
            "both": cls.BOTH,
        }
        normalized = value.lower().strip()
        if normalized not in mapping:
            raise ProfileError(
                f"Invalid platform: {value}. Must be 'github', 'gitlab', or 'both'"
            )
        return mapping[normalized]

    @property
    def alias_prefix(self) -> str:
        """Prefix used for SSH host aliases."""
        if self is Platform.BOTH:
            return "git"
        return str(self)

    def __str__(self) -> str:
        """Convert platform to string."""
        return self.name.lower()


@dataclass
class Profile:
    """A Git identity."""
    name: str
    email: str
    platform: Platform
    ssh_key: str
    gpg_key: str | None = None
    host: str | None = None

    def validate(self) -> None:
        """Check required fields.

        Raises:
            ProfileError: If name, email or ssh_key is blank
        """
        if not self.name.strip():
            raise ProfileError("Profile name cannot be empty")
        if not self.email.strip():
            raise ProfileError("Email cannot be empty")
        if not self.ssh_key.strip():
            raise ProfileError("SSH key path cannot be empty")

    def default_host(self) -> str:
        """Host used for SSH and detection, honoring a custom host."""
        if self.host:
            return self.host
        if self.platform is Platform.GITLAB:
            return "gitlab.com"
        return "github.com"

    def ssh_host_alias(self, profile_name: str) -> str:
        """SSH Host alias for this profile (e.g. ``github-work``)."""
        return f"{self.platform.alias_prefix}-{profile_name}"

    def to_dict(self) -> dict[str, Any]:
        """Convert profile to dictionary for serialization."""
        data: dict[str, Any] = {
            "name": self.name,
            "email": self.email,
            "platform": str(self.platform),
            "ssh_key": self.ssh_key,
        }
        if self.gpg_key:
            data["gpg_key"] = self.gpg_key
        if self.host:
            data["host"] = self.host
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create profile from dictionary."""
        missing = [
            key for key in ("name", "email", "platform", "ssh_key")
            if key not in data
        ]
        if missing:
            raise ProfileError(f"Missing required field(s): {', '.join(missing)}")

        return cls(
            name=str(data["name"]),
            email=str(data["email"]),
            platform=Platform.from_str(str(data["platform"])),
            ssh_key=str(data["ssh_key"]),
            gpg_key=data.get("gpg_key") or None,
            host=data.get("host") or None,
        )

"""gitid - Manage multiple Git identities across GitHub and GitLab."""

from gitid.config import Config
from gitid.detect import DetectionResult, detect_profile
from gitid.profile import Platform, Profile
from gitid.version import __version__

__all__ = [
    "Config",
    "DetectionResult",
    "Platform",
    "Profile",
    "__version__",
    "detect_profile",
]

"""Authenticate the gh and glab CLI tools for a profile."""

import logging
import subprocess

from .exceptions import AuthError
from .profile import Platform, Profile
from .ui_common import print_info

logger = logging.getLogger(__name__)

GH_INSTALL_URL = "https://cli.github.com/"
GLAB_INSTALL_URL = "https://gitlab.com/gitlab-org/cli"


def is_installed(tool: str) -> bool:
    """Check if a CLI tool is installed."""
    try:
        subprocess.run(
            [tool, "--version"],
            check=True,
            capture_output=True,
            text=True,
        )
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False


def _login(cmd: list[str], label: str) -> None:
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        # stdio is inherited so the tool can run its own prompts
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        raise AuthError(f"{label} authentication failed", details=f"exit code {e.returncode}") from e


def authenticate_github(host: str | None = None) -> None:
    """Run ``gh auth login`` using the SSH protocol."""
    if not is_installed("gh"):
        raise AuthError(
            "GitHub CLI (gh) is not installed",
            details=f"Install it from {GH_INSTALL_URL}",
        )

    cmd = ["gh", "auth", "login"]
    if host and host != "github.com":
        cmd.extend(["--hostname", host])
    cmd.extend(["--git-protocol", "ssh"])
    _login(cmd, "GitHub")


def authenticate_gitlab(host: str | None = None) -> None:
    """Run ``glab auth login``."""
    if not is_installed("glab"):
        raise AuthError(
            "GitLab CLI (glab) is not installed",
            details=f"Install it from {GLAB_INSTALL_URL}",
        )

    cmd = ["glab", "auth", "login"]
    if host and host != "gitlab.com":
        cmd.extend(["--hostname", host])
    _login(cmd, "GitLab")


def authenticate(profile: Profile) -> None:
    """Authenticate CLI tools for a profile based on its platform."""
    if profile.platform is Platform.GITHUB:
        authenticate_github(profile.host)
    elif profile.platform is Platform.GITLAB:
        authenticate_gitlab(profile.host)
    else:
        print_info("Authenticating GitHub...")
        authenticate_github(profile.host)
        print_info("Authenticating GitLab...")
        authenticate_gitlab(profile.host)

"""Profile auto-detection from repository remotes."""

import logging
from dataclasses import dataclass
from pathlib import Path

from . import git
from .config import Config
from .git import RemoteUrl
from .profile import Platform, Profile

logger = logging.getLogger(__name__)

ALIAS_SCORE = 100
PLATFORM_ALIAS_SCORE = 100
DEFAULT_HOST_SCORE = 50
PLATFORM_SCORE = 20
BOTH_PLATFORM_SCORE = 15
CUSTOM_HOST_SCORE = 80


@dataclass
class DetectionResult:
    """Best matching profile for a repository."""
    profile_name: str
    score: int
    reason: str


def score_profile(remote_url: RemoteUrl, profile_name: str, profile: Profile) -> int:
    """Score how well a profile matches a remote URL.

    Matches are additive, so a remote can earn points from several rules.
    """
    score = 0
    remote_host = remote_url.host

    if remote_host == profile.ssh_host_alias(profile_name):
        score += ALIAS_SCORE

    # 'both' profiles also own the platform-specific aliases
    if profile.platform is Platform.BOTH and remote_host in (
        f"github-{profile_name}",
        f"gitlab-{profile_name}",
    ):
        score += PLATFORM_ALIAS_SCORE

    if remote_host == profile.default_host():
        score += DEFAULT_HOST_SCORE

    is_github = "github" in remote_host
    is_gitlab = "gitlab" in remote_host
    if profile.platform is Platform.GITHUB and is_github:
        score += PLATFORM_SCORE
    elif profile.platform is Platform.GITLAB and is_gitlab:
        score += PLATFORM_SCORE
    elif profile.platform is Platform.BOTH and (is_github or is_gitlab):
        score += BOTH_PLATFORM_SCORE

    # Enterprise / self-hosted instances
    if profile.host and profile.host in remote_host:
        score += CUSTOM_HOST_SCORE

    return score


def format_match_reason(remote_url: RemoteUrl, profile: Profile) -> str:
    """Format a human-readable reason for the match."""
    host = remote_url.host

    if host == profile.default_host():
        return f"Remote host '{host}' matches profile host"
    if "github" in host and profile.platform in (Platform.GITHUB, Platform.BOTH):
        return f"GitHub repository detected ({host})"
    if "gitlab" in host and profile.platform in (Platform.GITLAB, Platform.BOTH):
        return f"GitLab repository detected ({host})"
    return f"Host '{host}' matched"


def parsed_remotes(path: Path | None = None) -> list[tuple[str, RemoteUrl]]:
    """Remotes of the repository whose URLs could be parsed, in git order."""
    remotes = []
    for remote in git.list_remotes(path):
        url = git.get_remote_url(remote, path)
        if url is None:
            logger.debug(f"Remote {remote} has no URL, skipping")
            continue
        remote_url = RemoteUrl.parse(url)
        if remote_url is None:
            logger.debug(f"Unrecognized URL for remote {remote}: {url}")
            continue
        remotes.append((remote, remote_url))
    return remotes


def detect_profile(config: Config, path: Path | None = None) -> DetectionResult | None:
    """Detect the best matching profile for the current repository.

    Every profile is scored against every remote; the highest score wins and
    the first one seen is kept on a tie. Profiles are scanned in name order.

    Returns:
        DetectionResult, or None if nothing scored above zero
    """
    best_match: DetectionResult | None = None

    for remote, remote_url in parsed_remotes(path):
        for name in config.profile_names():
            profile = config.profiles[name]
            score = score_profile(remote_url, name, profile)
            logger.debug(f"Remote {remote} ({remote_url.host}) vs profile {name}: {score}")
            if score == 0:
                continue
            if best_match is None or score > best_match.score:
                best_match = DetectionResult(
                    profile_name=name,
                    score=score,
                    reason=format_match_reason(remote_url, profile),
                )

    return best_match


def detect_and_suggest(config: Config, path: Path | None = None) -> tuple[str, str] | None:
    """Detect a profile and return ``(profile_name, reason)``."""
    result = detect_profile(config, path)
    if result is None:
        return None
    return result.profile_name, result.reason

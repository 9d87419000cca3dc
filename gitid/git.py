"""Git configuration and remote inspection."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import git
from git.exc import GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError

from .exceptions import GitConfigError

logger = logging.getLogger(__name__)

URL_SCHEMES = ("https://", "http://", "ssh://", "git://")


class ConfigScope(Enum):
    """Scope for git config operations."""
    LOCAL = "--local"
    GLOBAL = "--global"

    @property
    def flag(self) -> str:
        return self.value


@dataclass(frozen=True)
class RemoteUrl:
    """Parsed remote URL information."""
    host: str

    @classmethod
    def parse(cls, url: str) -> "RemoteUrl | None":
        """Parse a git remote URL.

        Handles the scp-like SSH form (``git@github.com:owner/repo.git``,
        including aliases such as ``git@github-work:owner/repo.git``) and
        URLs with a scheme (``https://github.com/owner/repo.git``).

        Returns:
            RemoteUrl, or None if the format is not recognized
        """
        url = url.strip()

        scheme = next((s for s in URL_SCHEMES if url.startswith(s)), None)
        if scheme is not None:
            authority = url[len(scheme):].split("/", 1)[0]
            host = authority.rsplit("@", 1)[-1]
            return cls(host=host) if host else None

        if "://" in url or "@" not in url:
            return None

        _user, rest = url.split("@", 1)
        if ":" not in rest:
            return None
        host = rest.split(":", 1)[0]
        return cls(host=host) if host else None


def _git(path: Path | None = None) -> git.Git:
    return git.Git(str(path) if path else os.getcwd())


def _run(path: Path | None, *args: str) -> str:
    """Run a git command and return its stdout.

    Raises:
        GitCommandError: On nonzero exit
        GitConfigError: If git is not installed
    """
    logger.debug(f"Running: git {' '.join(args)}")
    try:
        return _git(path).execute(["git", *args])
    except GitCommandNotFound as e:
        raise GitConfigError(
            "Git is not installed",
            details="Please install Git to use this tool",
        ) from e


def is_git_repo(path: Path | None = None) -> bool:
    """Check if we're inside a git repository."""
    try:
        git.Repo(str(path) if path else os.getcwd(), search_parent_directories=True)
        return True
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False


def list_remotes(path: Path | None = None) -> list[str]:
    """List all remotes in the repository, empty when not in one."""
    try:
        output = _run(path, "remote")
    except GitCommandError as e:
        logger.debug(f"git remote failed: {e.stderr}")
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


def get_remote_url(remote: str, path: Path | None = None) -> str | None:
    """Get the URL for a remote, or None if it has none."""
    try:
        url = _run(path, "remote", "get-url", remote).strip()
    except GitCommandError:
        return None
    return url or None


def get_config(key: str, scope: ConfigScope, path: Path | None = None) -> str | None:
    """Get a git config value, None when unset."""
    try:
        return _run(path, "config", scope.flag, "--get", key).strip()
    except GitCommandError:
        return None


def set_config(key: str, value: str, scope: ConfigScope, path: Path | None = None) -> None:
    """Set a git config value."""
    try:
        _run(path, "config", scope.flag, key, value)
    except GitCommandError as e:
        raise GitConfigError(
            f"Failed to set git config {key} = {value}",
            details=str(e.stderr).strip() or None,
        ) from e


def unset_config(key: str, scope: ConfigScope, path: Path | None = None) -> None:
    """Unset a git config value. Absent keys are not an error."""
    try:
        _run(path, "config", scope.flag, "--unset", key)
    except GitCommandError as e:
        logger.debug(f"Ignoring unset failure for {key} (exit {e.status})")


def apply_profile(
    name: str,
    email: str,
    gpg_key: str | None,
    scope: ConfigScope,
    path: Path | None = None,
) -> None:
    """Apply a profile's identity to git config.

    Args:
        name: Value for user.name
        email: Value for user.email
        gpg_key: Signing key; when None any signing settings are removed
        scope: Local repository or global config
        path: Working directory to run git in
    """
    set_config("user.name", name, scope, path)
    set_config("user.email", email, scope, path)

    if gpg_key:
        set_config("user.signingkey", gpg_key, scope, path)
        set_config("commit.gpgsign", "true", scope, path)
    else:
        unset_config("user.signingkey", scope, path)
        unset_config("commit.gpgsign", scope, path)

    logger.debug(f"Applied identity {name} <{email}> ({scope.name.lower()})")


def get_current_user(
    scope: ConfigScope, path: Path | None = None
) -> tuple[str | None, str | None]:
    """Get the (user.name, user.email) pair for a scope."""
    return get_config("user.name", scope, path), get_config("user.email", scope, path)

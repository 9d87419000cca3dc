"""Test configuration and fixtures."""

from collections.abc import Generator
from pathlib import Path

import git as gitpython
import pytest

from gitid.config import Config
from gitid.profile import Platform, Profile


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Create a temporary home directory and point gitid at it."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GITID_CONFIG_DIR", str(home / ".config" / "gitid"))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("GIT_CONFIG_GLOBAL", raising=False)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    yield home


@pytest.fixture
def config_file(temp_home: Path) -> Path:
    """Path of the gitid config file inside the temporary home."""
    return temp_home / ".config" / "gitid" / "config.toml"


@pytest.fixture
def work_profile() -> Profile:
    """A GitHub profile for 'work'."""
    return Profile(
        name="J D",
        email="j@c.com",
        platform=Platform.GITHUB,
        ssh_key="~/.ssh/id_work",
    )


@pytest.fixture
def sample_config(work_profile: Profile) -> Config:
    """Config with a GitHub, a GitLab and a 'both' profile."""
    config = Config()
    config.add_profile("work", work_profile)
    config.add_profile(
        "personal",
        Profile(
            name="Jane Doe",
            email="jane@example.com",
            platform=Platform.GITLAB,
            ssh_key="~/.ssh/id_personal",
            gpg_key="ABCD1234",
        ),
    )
    config.add_profile(
        "oss",
        Profile(
            name="Jane Doe",
            email="jane@oss.dev",
            platform=Platform.BOTH,
            ssh_key="~/.ssh/id_oss",
        ),
    )
    config.default_profile = "work"
    return config


@pytest.fixture
def git_repo(temp_home: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[gitpython.Repo, None, None]:
    """Create a git repository and make it the working directory."""
    repo_path = temp_home / "repo"
    repo = gitpython.Repo.init(repo_path)
    monkeypatch.chdir(repo_path)
    yield repo
    repo.close()

"""Tests for resolving the current git identity to a profile."""

import git as gitpython
import pytest

from gitid import git
from gitid.config import Config
from gitid.git import ConfigScope
from gitid.identity import find_profile_by_identity, get_current_identity, get_current_profile
from gitid.profile import Platform, Profile


@pytest.fixture
def identities(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Replace git's local/global (name, email) lookup."""
    values = {ConfigScope.LOCAL: (None, None), ConfigScope.GLOBAL: (None, None)}
    monkeypatch.setattr("gitid.git.get_current_user", lambda scope, path=None: values[scope])
    return values


def test_local_identity_wins(identities: dict) -> None:
    identities[ConfigScope.LOCAL] = ("Local", "local@example.com")
    identities[ConfigScope.GLOBAL] = ("Global", "global@example.com")
    assert get_current_identity() == ("Local", "local@example.com")


def test_falls_back_to_global(identities: dict) -> None:
    identities[ConfigScope.GLOBAL] = ("Global", "global@example.com")
    assert get_current_identity() == ("Global", "global@example.com")


def test_partial_local_identity_does_not_fall_back(identities: dict) -> None:
    identities[ConfigScope.LOCAL] = ("Local", None)
    identities[ConfigScope.GLOBAL] = ("Global", "global@example.com")
    assert get_current_identity() == ("Local", None)


def test_find_profile_by_identity(sample_config: Config) -> None:
    assert find_profile_by_identity(sample_config, "J D", "j@c.com") == "work"
    assert find_profile_by_identity(sample_config, "Jane Doe", "jane@oss.dev") == "oss"
    assert find_profile_by_identity(sample_config, "J D", "other@c.com") is None
    assert find_profile_by_identity(sample_config, None, "j@c.com") is None


def test_duplicate_identity_returns_one_of_them() -> None:
    config = Config()
    for name in ("b", "a"):
        config.add_profile(
            name,
            Profile(name="Same", email="same@example.com", platform=Platform.GITHUB, ssh_key="~/.ssh/k"),
        )
    assert find_profile_by_identity(config, "Same", "same@example.com") in {"a", "b"}


def test_get_current_profile(identities: dict, sample_config: Config) -> None:
    identities[ConfigScope.GLOBAL] = ("Jane Doe", "jane@example.com")
    assert get_current_profile(sample_config) == "personal"


def test_get_current_profile_no_match(identities: dict, sample_config: Config) -> None:
    identities[ConfigScope.LOCAL] = ("Someone", "someone@else.com")
    assert get_current_profile(sample_config) is None


def test_get_current_profile_in_real_repo(git_repo: gitpython.Repo, sample_config: Config) -> None:
    git.apply_profile("J D", "j@c.com", None, ConfigScope.LOCAL)
    assert get_current_profile(sample_config) == "work"

"""SSH config synchronization for gitid profiles."""

import logging
from pathlib import Path

from .config import Config
from .exceptions import SSHError
from .files import atomic_write_text
from .profile import Platform, Profile

logger = logging.getLogger(__name__)

MANAGED_START = "# === GITID MANAGED START ==="
MANAGED_END = "# === GITID MANAGED END ==="


def ssh_dir() -> Path:
    """Get the user's SSH directory."""
    return Path.home() / ".ssh"


def ssh_config_path() -> Path:
    """Get the SSH config file path."""
    return ssh_dir() / "config"


def _host_stanza(alias: str, hostname: str, identity_file: str) -> str:
    return (
        f"Host {alias}\n"
        f"  HostName {hostname}\n"
        "  User git\n"
        f"  IdentityFile {identity_file}\n"
        "  IdentitiesOnly yes\n"
    )


def generate_host_entry(profile_name: str, profile: Profile) -> str:
    """Generate the SSH Host entries for a profile."""
    entry = _host_stanza(
        profile.ssh_host_alias(profile_name),
        profile.default_host(),
        profile.ssh_key,
    )

    if profile.platform is Platform.BOTH:
        entry += "\n" + _host_stanza(f"github-{profile_name}", "github.com", profile.ssh_key)
        entry += "\n" + _host_stanza(f"gitlab-{profile_name}", "gitlab.com", profile.ssh_key)

    return entry


def generate_managed_block(config: Config) -> str:
    """Generate the managed block for all profiles, sorted by name."""
    parts = [MANAGED_START + "\n"]
    for name in config.profile_names():
        parts.append(generate_host_entry(name, config.profiles[name]))
    parts.append(MANAGED_END)
    return "".join(parts)


def merge_managed_block(content: str, block: str) -> tuple[str, bool]:
    """Merge a freshly generated block into existing SSH config content.

    An existing managed block is replaced in place with everything around it
    left untouched. Otherwise the block is appended after a blank line.

    Returns:
        Tuple of (new_content, was_update)
    """
    start = content.find(MANAGED_START)
    end = content.find(MANAGED_END, start + len(MANAGED_START)) if start != -1 else -1

    if start != -1 and end != -1:
        end += len(MANAGED_END)
        return content[:start] + block + content[end:], True

    new_content = content
    if new_content and not new_content.endswith("\n"):
        new_content += "\n"
    if new_content:
        new_content += "\n"
    return new_content + block + "\n", False


def read_ssh_config(path: Path | None = None) -> str:
    """Read the SSH config, empty when the file does not exist."""
    path = path or ssh_config_path()
    if not path.exists():
        return ""
    try:
        # newline="" keeps CRLF line endings outside the managed block intact
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SSHError(f"Failed to read SSH config: {path}", details=str(e)) from e


def write_ssh_config(content: str, path: Path | None = None) -> None:
    """Atomically replace the SSH config, creating ~/.ssh if needed."""
    path = path or ssh_config_path()
    try:
        if not path.parent.exists():
            path.parent.mkdir(mode=0o700, parents=True)
        atomic_write_text(path, content, mode=None if path.exists() else 0o600)
    except OSError as e:
        raise SSHError(f"Failed to write SSH config: {path}", details=str(e)) from e


def sync_ssh_config(config: Config, path: Path | None = None) -> tuple[int, bool]:
    """Sync the SSH config managed block with all profiles.

    Returns:
        Tuple of (profile_count, was_update)
    """
    path = path or ssh_config_path()
    current = read_ssh_config(path)
    new_content, was_update = merge_managed_block(current, generate_managed_block(config))

    write_ssh_config(new_content, path)
    logger.debug(
        f"{'Updated' if was_update else 'Appended'} managed block in {path} "
        f"with {len(config.profiles)} profile(s)"
    )
    return len(config.profiles), was_update

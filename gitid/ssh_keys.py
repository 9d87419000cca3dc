"""SSH key discovery and generation."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .exceptions import SSHError
from .ssh import ssh_dir as default_ssh_dir

logger = logging.getLogger(__name__)

SKIPPED_FILES = {"config", "known_hosts", "known_hosts.old", "authorized_keys"}


@dataclass
class SSHKey:
    """Represents an SSH key pair."""
    name: str
    private_key: Path
    public_key: Path
    key_type: str

    def path_display(self) -> str:
        """Private key path with the home directory shown as ``~``."""
        try:
            return f"~/{self.private_key.relative_to(Path.home()).as_posix()}"
        except ValueError:
            return str(self.private_key)


def _public_key_path(private_key: Path) -> Path:
    return private_key.with_name(private_key.name + ".pub")


def discover_keys(ssh_dir: Path | None = None) -> list[SSHKey]:
    """Discover key pairs in the SSH directory.

    A file counts as a private key when a matching ``.pub`` file sits next
    to it.
    """
    ssh_dir = ssh_dir or default_ssh_dir()
    if not ssh_dir.exists():
        return []

    try:
        entries = list(ssh_dir.iterdir())
    except OSError as e:
        raise SSHError(f"Failed to read SSH directory: {ssh_dir}", details=str(e)) from e

    keys = []
    for path in entries:
        filename = path.name
        if (
            path.is_dir()
            or filename.endswith(".pub")
            or filename in SKIPPED_FILES
            or filename.startswith(".")
        ):
            continue

        public_key = _public_key_path(path)
        if public_key.exists():
            keys.append(
                SSHKey(
                    name=filename,
                    private_key=path,
                    public_key=public_key,
                    key_type=detect_key_type(path),
                )
            )

    keys.sort(key=lambda k: k.name)
    return keys


def detect_key_type(path: Path) -> str:
    """Detect the type of an SSH key (ed25519, rsa, ecdsa, ...)."""
    try:
        first_line = path.read_text(errors="replace").splitlines()[0]
    except (OSError, IndexError):
        return "unknown"

    if "RSA PRIVATE KEY" in first_line:
        return "rsa"
    if "EC PRIVATE KEY" in first_line:
        return "ecdsa"
    if "OPENSSH PRIVATE KEY" not in first_line:
        return "unknown"

    # OpenSSH format hides the type, fall back to the filename then the .pub
    for key_type in ("ed25519", "ecdsa", "rsa"):
        if key_type in path.name:
            return key_type

    try:
        public = _public_key_path(path).read_text()
    except OSError:
        return "openssh"
    if public.startswith("ssh-ed25519"):
        return "ed25519"
    if public.startswith("ssh-rsa"):
        return "rsa"
    if public.startswith("ecdsa-"):
        return "ecdsa"
    return "openssh"


def generate_key(profile_name: str, email: str, ssh_dir: Path | None = None) -> SSHKey:
    """Generate a new ed25519 key pair for a profile.

    Args:
        profile_name: Profile name, used in the key filename
        email: Key comment
        ssh_dir: Directory for the key, defaults to ~/.ssh

    Returns:
        SSHKey object
    """
    ssh_dir = ssh_dir or default_ssh_dir()
    try:
        ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as e:
        raise SSHError(f"Failed to create SSH directory: {ssh_dir}", details=str(e)) from e

    key_name = f"id_ed25519_{profile_name}"
    private_key = ssh_dir / key_name
    public_key = _public_key_path(private_key)

    if private_key.exists():
        raise SSHError(f"SSH key already exists: {private_key}")

    cmd = [
        "ssh-keygen",
        "-t", "ed25519",
        "-C", email,
        "-f", str(private_key),
        "-N", "",  # Empty passphrase, can be changed later
    ]
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise SSHError(
            "ssh-keygen not found",
            details="Please install OpenSSH to generate keys",
        ) from e
    except subprocess.CalledProcessError as e:
        raise SSHError("ssh-keygen failed to generate key", details=e.stderr) from e

    try:
        private_key.chmod(0o600)
        public_key.chmod(0o644)
    except OSError as e:
        raise SSHError(f"Failed to set key permissions: {e}") from e

    return SSHKey(
        name=key_name,
        private_key=private_key,
        public_key=public_key,
        key_type="ed25519",
    )


def read_public_key(key: SSHKey) -> str:
    """Get the contents of the public key file."""
    try:
        return key.public_key.read_text().strip()
    except OSError as e:
        raise SSHError(f"Failed to read public key: {key.public_key}", details=str(e)) from e

"""Command-line interface."""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

import click
from rich.markup import escape

from . import git
from .auth import authenticate
from .config import Config, config_path, validate_profile_name
from .detect import detect_profile
from .exceptions import GitidError, ProfileError
from .git import ConfigScope
from .identity import get_current_identity, get_current_profile
from .profile import Platform, Profile
from .ssh import ssh_config_path, sync_ssh_config
from .ui import (
    ask,
    print_profile_details,
    print_profile_list,
    print_ssh_aliases,
    prompt_platform,
    prompt_required,
    prompt_ssh_key,
    select_profile,
)
from .ui_common import confirm_action, console, print_info, print_success, print_warning
from .version import __version__

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def handle_errors(f: F) -> F:
    """Decorator to handle errors in CLI commands."""
    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except ProfileError as e:
            console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
            if e.details:
                console.print(f"[dim]{escape(e.details)}[/dim]")
            if e.profile_name and "already exists" in str(e):
                console.print(
                    f"Use a different name or remove it first: "
                    f"[command]gitid remove {escape(e.profile_name)}[/command]"
                )
            raise click.Abort()

        except GitidError as e:
            console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
            if e.details:
                console.print(f"[dim]{escape(e.details)}[/dim]")
            raise click.Abort()

        except (click.ClickException, click.Abort):
            raise

        except Exception as e:
            logger.error(f"Unexpected error: {str(e)}", exc_info=True)
            console.print(f"\n[bold red]Unexpected error:[/bold red] {escape(str(e))}")
            raise click.Abort()
    return cast(F, wrapper)


def apply_identity(profile_name: str, profile: Profile, scope: ConfigScope) -> None:
    """Write a profile's identity to git config."""
    git.apply_profile(profile.name, profile.email, profile.gpg_key, scope)
    logger.debug(f"Applied profile {profile_name} with scope {scope.name}")


def require_profiles(config: Config) -> None:
    if not config.profiles:
        raise GitidError("No profiles configured", details="Run 'gitid add' first")


@click.group()
@click.version_option(__version__, prog_name="gitid")
@click.option('--debug', is_flag=True, help='Enable debug logging')
def cli(debug: bool) -> None:
    """Manage multiple Git identities across GitHub and GitLab."""
    if debug:
        root = logging.getLogger()
        root.setLevel(logging.DEBUG)
        for handler in root.handlers:
            handler.setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled")


@cli.command()
@handle_errors
def init() -> None:
    """Initialize gitid configuration directory and create empty config."""
    path = config_path()
    if Config.init(path):
        print_success(f"Created config at {path}")
    else:
        print_info(f"Config already exists at {path}")


@cli.command()
@click.argument("name", required=False)
@click.option("--user-name", help="Git user name")
@click.option("--email", help="Git email")
@click.option("--platform", help="Platform: github, gitlab, or both")
@click.option("--ssh-key", help="Path to SSH private key")
@click.option("--gpg-key", help="GPG signing key ID (optional)")
@click.option("--host", help="Custom host for enterprise instances (optional)")
@handle_errors
def add(
    name: str | None = None,
    user_name: str | None = None,
    email: str | None = None,
    platform: str | None = None,
    ssh_key: str | None = None,
    gpg_key: str | None = None,
    host: str | None = None,
) -> None:
    """Add a new profile."""
    config = Config.load()

    if name is None:
        name = prompt_required("Profile name", "e.g. 'work', 'personal', 'client-acme'")
    validate_profile_name(name)

    if config.has_profile(name):
        raise ProfileError(f"Profile '{name}' already exists", profile_name=name)

    # Validate before asking for anything else
    selected_platform = Platform.from_str(platform) if platform is not None else None
    # Optional fields are only prompted for when the required ones were too
    interactive = None in (user_name, email, platform, ssh_key)

    if user_name is None:
        user_name = prompt_required("Git user name", "This will be used for commit author")
    if email is None:
        email = prompt_required("Git email", "This will be used for commit author")
    if selected_platform is None:
        selected_platform = prompt_platform()
    if ssh_key is None:
        ssh_key = prompt_ssh_key(name, email)
    if gpg_key is None and interactive:
        gpg_key = ask("GPG signing key (optional)", "Press Enter to skip", default="") or None
    if host is None and interactive and confirm_action(
        "Use custom host? (GitHub Enterprise or self-hosted GitLab)", default=False
    ):
        host = ask("Custom host", "e.g. 'github.company.com' or 'gitlab.myorg.com'", default="") or None

    profile = Profile(
        name=user_name,
        email=email,
        platform=selected_platform,
        ssh_key=ssh_key,
        gpg_key=gpg_key or None,
        host=host or None,
    )
    config.add_profile(name, profile)
    config.save()

    console.print()
    print_success(f"Added profile '{escape(name)}'")
    print_info("Run [command]gitid ssh-sync[/command] to sync SSH config")


@cli.command()
@click.argument("name", required=False)
@click.option("-f", "--force", is_flag=True, help="Skip confirmation prompt")
@click.option("--clean-ssh", is_flag=True, help="Also remove SSH config entry")
@handle_errors
def remove(name: str | None = None, force: bool = False, clean_ssh: bool = False) -> None:
    """Remove a profile."""
    config = Config.load()
    require_profiles(config)

    if name is None:
        name = select_profile(config, "Select profile to remove")
    config.require_profile(name)

    if not force and not confirm_action(f"Remove profile '{name}'?", default=False):
        print_info("Cancelled")
        return

    config.remove_profile(name)
    config.save()
    print_success(f"Removed profile '{escape(name)}'")

    if clean_ssh:
        sync_ssh_config(config)
        print_info("SSH config updated")


@cli.command("list")
@handle_errors
def list_profiles() -> None:
    """List all configured profiles."""
    config = Config.load()

    if not config.profiles:
        print_info("No profiles configured")
        print_info("Run [command]gitid add[/command] to add a profile")
        return

    current = get_current_profile(config) if git.is_git_repo() else None
    print_profile_list(config, current)


@cli.command()
@click.argument("name", required=False)
@click.option("-g", "--global", "global_", is_flag=True, help="Apply globally instead of to current repository")
@handle_errors
def use(name: str | None = None, global_: bool = False) -> None:
    """Switch to a profile."""
    config = Config.load()
    require_profiles(config)

    if name is None:
        name = select_profile(config)
    profile = config.require_profile(name)

    if global_:
        scope = ConfigScope.GLOBAL
    elif git.is_git_repo():
        scope = ConfigScope.LOCAL
    else:
        raise GitidError("Not in a git repository. Use --global to set globally.")

    apply_identity(name, profile, scope)

    print_success(
        f"Switched to profile '{escape(name)}' {'globally' if global_ else 'locally'}"
    )
    console.print(f"  Name:  {escape(profile.name)}")
    console.print(f"  Email: {escape(profile.email)}")
    if profile.gpg_key:
        console.print("  GPG signing: enabled")


@cli.command()
@click.argument("name", required=False)
@click.option("--unset", is_flag=True, help="Clear the default profile")
@handle_errors
def default(name: str | None = None, unset: bool = False) -> None:
    """Show or set the default profile."""
    config = Config.load()

    if unset:
        config.set_default(None)
        config.save()
        print_success("Cleared default profile")
        return

    if name is None:
        if config.default_profile:
            console.print(escape(config.default_profile))
        else:
            print_info("No default profile set")
        return

    config.set_default(name)
    config.save()
    print_success(f"Default profile set to '{escape(name)}'")


@cli.command()
@click.argument("name", required=False)
@handle_errors
def auth(name: str | None = None) -> None:
    """Authenticate CLI tools (gh/glab) for a profile."""
    config = Config.load()
    require_profiles(config)

    if name is None:
        name = select_profile(config, "Select profile to authenticate")
    profile = config.require_profile(name)

    print_info(f"Authenticating CLI tools for profile '{escape(name)}'...")
    authenticate(profile)
    print_success(f"Authentication complete for '{escape(name)}'")


@cli.command()
@click.option("--porcelain", is_flag=True, help="Machine-readable output for shell prompts")
@handle_errors
def current(porcelain: bool = False) -> None:
    """Show current active profile."""
    config = Config.load()

    if porcelain:
        profile_name = get_current_profile(config)
        if profile_name:
            click.echo(profile_name)
        return

    if not git.is_git_repo():
        print_info("Not in a git repository")
        return

    name, email = get_current_identity()
    profile_name = get_current_profile(config)
    if profile_name:
        console.print(f"Current profile: [profile]{escape(profile_name)}[/profile]")
        print_profile_details(config.profiles[profile_name], indent="  ")
    elif name or email:
        console.print("Current git identity (no matching profile):")
        if name:
            console.print(f"  Name:  {escape(name)}")
        if email:
            console.print(f"  Email: {escape(email)}")
    else:
        print_info("No git identity configured")


@cli.command()
@click.option("-a", "--auto", "auto", is_flag=True, help="Automatically apply detected profile without prompting")
@handle_errors
def detect(auto: bool = False) -> None:
    """Auto-detect appropriate profile from repository remote."""
    if not git.is_git_repo():
        raise GitidError("Not in a git repository")

    config = Config.load()
    result = detect_profile(config)

    if result is None:
        console.print("No matching profile detected for this repository")
        origin = git.get_remote_url("origin")
        if origin:
            console.print(f"  Remote origin: {escape(origin)}")

        if config.profiles and not auto and confirm_action(
            "Would you like to select a profile manually?", default=True
        ):
            name = select_profile(config)
            apply_identity(name, config.require_profile(name), ConfigScope.LOCAL)
            print_success(f"Applied profile '{escape(name)}'")
        return

    console.print(
        f"[success]Match:[/success] Detected profile: [profile]{escape(result.profile_name)}[/profile]"
    )
    console.print(f"  Reason: {escape(result.reason)}")

    if not auto and not confirm_action("Apply this profile?", default=True):
        print_info("Cancelled")
        return

    apply_identity(result.profile_name, config.require_profile(result.profile_name), ConfigScope.LOCAL)
    print_success(f"Applied profile '{escape(result.profile_name)}'")


@cli.command("ssh-sync")
@handle_errors
def ssh_sync() -> None:
    """Sync SSH config with all profiles."""
    config = Config.load()

    if not config.profiles:
        print_warning("No profiles to sync")
        return

    count, was_update = sync_ssh_config(config)

    action = "Updated" if was_update else "Added"
    print_success(f"{action} SSH config with {count} profile(s)")
    console.print(f"  File: [path]{escape(str(ssh_config_path()))}[/path]")
    print_ssh_aliases(config)

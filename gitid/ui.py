"""UI module for gitid."""

from rich import box
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from .config import Config
from .exceptions import GitidError
from .profile import Platform, Profile
from .ssh_keys import SSHKey, discover_keys, generate_key, read_public_key
from .ui_common import console, print_success

GENERATE_CHOICE = "new"
MANUAL_CHOICE = "path"


def ask(prompt: str, hint: str | None = None, default: str | None = None, choices: list[str] | None = None) -> str:
    """Ask for a value, turning Ctrl-C into a clean cancellation."""
    if hint:
        console.print(f"[dim]{escape(hint)}[/dim]")
    try:
        if default is None:
            return Prompt.ask(f"[cyan]{prompt}[/cyan]", choices=choices, console=console).strip()
        return Prompt.ask(
            f"[cyan]{prompt}[/cyan]",
            default=default,
            choices=choices,
            show_default=bool(default),
            console=console,
        ).strip()
    except (KeyboardInterrupt, EOFError):
        raise GitidError("Operation cancelled by user") from None


def prompt_required(prompt: str, hint: str | None = None) -> str:
    """Ask until a non-empty value is given."""
    while True:
        value = ask(prompt, hint)
        if value:
            return value
        console.print("[error]A value is required[/error]")
        hint = None


def prompt_platform() -> Platform:
    """Prompt for the hosting platform."""
    value = ask(
        "Platform",
        "Select the Git hosting platform",
        default="github",
        choices=[str(p) for p in Platform],
    )
    return Platform.from_str(value)


def select_profile(config: Config, prompt: str = "Select profile") -> str:
    """Let the user pick one of the configured profiles."""
    names = config.profile_names()
    if not names:
        raise GitidError("No profiles configured", details="Run 'gitid add' first")
    default = config.default_profile if config.default_profile in names else names[0]
    return ask(prompt, default=default, choices=names)


def prompt_ssh_key(profile_name: str, email: str) -> str:
    """Select an existing SSH key, generate one, or enter a path.

    Returns:
        The key path as it should be stored in the profile
    """
    keys = discover_keys()

    if keys:
        table = Table(title="SSH Keys", box=box.ROUNDED, header_style="bold cyan", border_style="blue")
        table.add_column("#", style="yellow", justify="right")
        table.add_column("Key", style="cyan")
        table.add_column("Type", style="green")
        for index, key in enumerate(keys, start=1):
            table.add_row(str(index), escape(key.path_display()), key.key_type)
        console.print(table)

    console.print(
        f"[dim]Enter a number to use an existing key, '{GENERATE_CHOICE}' to generate one, "
        f"or '{MANUAL_CHOICE}' to enter a path[/dim]"
    )
    choices = [str(i) for i in range(1, len(keys) + 1)] + [GENERATE_CHOICE, MANUAL_CHOICE]
    selection = ask("SSH key", default=GENERATE_CHOICE if not keys else "1", choices=choices)

    if selection == GENERATE_CHOICE:
        console.print("Generating new ed25519 SSH key...")
        key = generate_key(profile_name, email)
        print_success(f"Generated SSH key: {key.path_display()}")
        print_public_key(key)
        return key.path_display()

    if selection == MANUAL_CHOICE:
        return ask("SSH key path", default=f"~/.ssh/id_ed25519_{profile_name}")

    return keys[int(selection) - 1].path_display()


def print_public_key(key: SSHKey) -> None:
    """Show a public key so it can be added to GitHub/GitLab."""
    console.print("\n[warning]Public key (add this to GitHub/GitLab):[/warning]")
    console.print(escape(read_public_key(key)), soft_wrap=True)
    console.print()


def print_profile_details(profile: Profile, indent: str = "    ") -> None:
    """Print the fields of a profile."""
    console.print(f"{indent}Name:     {escape(profile.name)}")
    console.print(f"{indent}Email:    {escape(profile.email)}")
    console.print(f"{indent}Platform: {profile.platform}")
    console.print(f"{indent}SSH Key:  {escape(profile.ssh_key)}")
    if profile.gpg_key:
        console.print(f"{indent}GPG Key:  {escape(profile.gpg_key)}")
    if profile.host:
        console.print(f"{indent}Host:     {escape(profile.host)}")


def print_profile_list(config: Config, current: str | None = None) -> None:
    """Print all profiles, marking the current and default ones."""
    console.print("[bold]Profiles:[/bold]\n")
    for name in config.profile_names():
        marker = "[success]*[/success]" if name == current else " "
        default = " [dim](default)[/dim]" if name == config.default_profile else ""
        console.print(f"{marker} [profile]{escape(name)}[/profile]{default}")
        print_profile_details(config.profiles[name])
        console.print()


def print_ssh_aliases(config: Config) -> None:
    """Print the Host aliases written to the SSH config."""
    console.print("\nSSH Host aliases:")
    for name in config.profile_names():
        profile = config.profiles[name]
        aliases = [(profile.ssh_host_alias(name), profile.default_host())]
        if profile.platform is Platform.BOTH:
            aliases.append((f"github-{name}", "github.com"))
            aliases.append((f"gitlab-{name}", "gitlab.com"))
        for alias, host in aliases:
            console.print(f"  [cyan]{escape(alias)}[/cyan] -> {escape(host)}")

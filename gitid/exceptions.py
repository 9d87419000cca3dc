"""Custom exceptions for gitid."""


class GitidError(Exception):
    """Base exception for gitid."""

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ProfileError(GitidError):
    """Profile-related errors."""

    def __init__(
        self,
        message: str,
        profile_name: str | None = None,
        details: str | None = None,
    ) -> None:
        self.profile_name = profile_name
        super().__init__(message, details=details)


class ConfigError(GitidError):
    """Errors reading or writing the profile config file."""
    pass


class GitConfigError(GitidError):
    """Errors related to Git configuration."""
    pass


class SSHError(GitidError):
    """Errors related to SSH config and key management."""
    pass


class AuthError(GitidError):
    """Errors raised while authenticating gh/glab."""
    pass

"""
Core error classes for the repohint application.
"""

from typing import Any


class ConfigurationError(ValueError):
    """Raised when the configuration is missing, malformed or incomplete."""

    def __init__(self, errors: list[str] | str) -> None:
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__(f"Configuration errors: {', '.join(self.errors)}")


class GitHubTransportError(Exception):
    """Raised when a GitHub request fails at the network level or times out."""

    def __init__(self, method: str, path: str, reason: str) -> None:
        self.method = method
        self.path = path
        self.reason = reason
        super().__init__(f"Request failed {method} {path}: {reason}")


class GitHubResponseError(Exception):
    """Raised when GitHub answers with a body that cannot be decoded."""

    pass


class GitHubAPIError(Exception):
    """Raised when GitHub answers with an error status code."""

    def __init__(self, method: str, path: str, status: int, body: Any = None) -> None:
        self.method = method
        self.path = path
        self.status = status
        self.body = body
        super().__init__(f"{method} {path} => {status}")


class InvalidStateError(ValueError):
    """Raised when an unsupported state or event value is passed to a GitHub operation."""

    pass


class GitCommandError(Exception):
    """Raised when a local git command exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{' '.join(command)} exited with {returncode}: {stderr.strip()}")


class RuleDefinitionError(ValueError):
    """Raised when a rule descriptor is not usable."""

    pass


class PreprocessorError(Exception):
    """Raised when a pre-processor fails; the check cannot continue."""

    def __init__(self, name: str, cause: Exception) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"Pre-processor {name} failed: {cause}")

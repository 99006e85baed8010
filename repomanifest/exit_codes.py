"""
Process exit codes for repomanifest commands.

0-2 follow shell convention; 64 and up are specific to manifest work.
"""
from typing import Optional

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2          # click reports bad arguments with this code

NO_REPOS_FOUND = 64      # Filter matched nothing
NO_MANIFEST = 65         # Manifest file missing
CONFIG_ERROR = 66
PERMISSION_ERROR = 67
GIT_ERROR = 68
DATA_ERROR = 70          # Manifest text is not JSON, or breaks the schema
PARTIAL_SUCCESS = 71     # e.g. some repositories failed to sync
INTERRUPTED = 130        # Ctrl+C

# Looked up by class name along the exception's MRO
EXCEPTION_EXIT_CODES = {
    'PermissionError': PERMISSION_ERROR,
    'FileNotFoundError': GENERAL_ERROR,
    'ValidationError': DATA_ERROR,
    'ParseError': DATA_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """Exit code for an exception; CommandError carries its own."""
    if isinstance(exc, CommandError):
        return exc.exit_code
    for cls in type(exc).__mro__:
        if cls.__name__ in EXCEPTION_EXIT_CODES:
            return EXCEPTION_EXIT_CODES[cls.__name__]
    return GENERAL_ERROR


class CommandError(Exception):
    """A failure a command reports with a specific exit code."""
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class NoReposFoundError(CommandError):
    """No repository matched the requested name or filter."""
    def __init__(self, message: str = "No repositories found"):
        super().__init__(message, NO_REPOS_FOUND)


class ManifestNotFoundError(CommandError):
    """The manifest file does not exist yet (run `repomanifest init`)."""
    def __init__(self, path: Optional[str] = None):
        message = f"Manifest not found: {path}" if path else "Manifest not found"
        super().__init__(message, NO_MANIFEST)
        self.path = path


class PartialSuccessError(CommandError):
    """Some repositories were processed, others failed."""
    def __init__(self, message: str, succeeded: int = 0, failed: int = 0):
        super().__init__(message, PARTIAL_SUCCESS)
        self.succeeded = succeeded
        self.failed = failed

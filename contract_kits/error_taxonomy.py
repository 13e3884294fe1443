"""
Tooling Error Taxonomy

Every failure in the tooling surfaces immediately to the caller: a non-zero
exit code for CLI entry points, a raised exception for library callers.
Nothing here is retried.

Each category carries:
- severity: 'critical' | 'high' | 'medium'
- exit_code: process exit code used by CLI entry points
- description: what went wrong, in user terms
"""
from typing import Optional


class ToolingError(Exception):
    """Base class for all tooling failures."""

    code = "tooling_error"
    exit_code = 1

    def __init__(self, message: str, *, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}\n{self.detail}"
        return self.message


class UnsupportedPlatform(ToolingError):
    code = "unsupported_platform"


class BinaryNotFound(ToolingError):
    code = "binary_not_found"


class ChildProcessSignal(ToolingError):
    """Child process was terminated by a signal instead of exiting."""

    code = "child_process_signal"

    def __init__(self, signal_number: int, command: str):
        super().__init__(f"{command} was terminated by signal {signal_number}")
        self.signal_number = signal_number
        self.exit_code = 128 + signal_number


class InvalidSchema(ToolingError):
    code = "invalid_schema"


class OutputWriteError(ToolingError):
    code = "io_error"


class BuildFailed(ToolingError):
    code = "build_failed"

    def __init__(self, returncode: int, command: str):
        super().__init__(f"Build command exited with status {returncode}: {command}")
        self.returncode = returncode
        self.exit_code = returncode


class UploadError(ToolingError):
    code = "upload_error"


class InstantiateError(ToolingError):
    code = "instantiate_error"


class TransactionTimeout(ToolingError):
    code = "transaction_timeout"


class ErrorTaxonomy:
    """Map error codes to user-facing categories."""

    CATEGORIES = {
        'unsupported_platform': {
            'severity': 'critical',
            'exit_code': 1,
            'description': 'Host operating system or CPU architecture has no prebuilt binary',
        },
        'binary_not_found': {
            'severity': 'critical',
            'exit_code': 1,
            'description': 'Expected platform package is not installed',
        },
        'child_process_signal': {
            'severity': 'high',
            'exit_code': None,  # 128 + signal number
            'description': 'Dispatched binary was killed by a signal',
        },
        'invalid_schema': {
            'severity': 'high',
            'exit_code': 1,
            'description': 'Contract schema is malformed or rejected by the type renderer',
        },
        'io_error': {
            'severity': 'high',
            'exit_code': 1,
            'description': 'Generated binding could not be written to the output path',
        },
        'build_failed': {
            'severity': 'critical',
            'exit_code': None,  # child exit status
            'description': 'Container build command returned non-zero',
        },
        'upload_error': {
            'severity': 'critical',
            'exit_code': 1,
            'description': 'Contract bytecode upload was rejected by the chain',
        },
        'instantiate_error': {
            'severity': 'critical',
            'exit_code': 1,
            'description': 'Contract instantiation was rejected by the chain',
        },
        'transaction_timeout': {
            'severity': 'medium',
            'exit_code': 1,
            'description': 'Transaction was not included in a block within the timeout',
        },
    }

    @classmethod
    def classify(cls, error_code: str) -> dict:
        """
        Retrieve category info for an error code.

        Args:
            error_code: One of the category keys (ToolingError.code)

        Returns:
            Dict with severity, exit_code, description
        """
        if error_code in cls.CATEGORIES:
            return cls.CATEGORIES[error_code]
        return {
            'severity': 'unknown',
            'exit_code': 1,
            'description': 'Unknown error category',
        }

    @classmethod
    def all_categories(cls) -> list:
        """Return list of all error category names."""
        return list(cls.CATEGORIES.keys())

"""
Error types and message normalization for gateway responses.

Client construction failures are raised as ConfigError and surface to the
caller. Listing and exec failures are folded into the response's ``error``
field through normalize_error.
"""

CONNECTION_REFUSED_MESSAGE = "Connection refused. Is the cluster running?"


class ConfigError(Exception):
    """Credential source could not be turned into an API client"""


class CommandFailedError(Exception):
    """Command ran in the container but exited non-zero"""

    def __init__(self, returncode: int, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command exited with code {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class ExecFailedError(Exception):
    """Exec session ended with a failure status other than an exit code"""


def is_connection_refused(exc: BaseException) -> bool:
    # urllib3 reports "[Errno 111] Connection refused", so match case-insensitively
    return "connection refused" in str(exc).lower()


def normalize_error(exc: BaseException) -> str:
    """Turn a listing failure into the message shown to the user"""
    if is_connection_refused(exc):
        return CONNECTION_REFUSED_MESSAGE
    return str(exc)

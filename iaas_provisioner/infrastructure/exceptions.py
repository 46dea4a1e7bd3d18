from typing import Optional, Any, Sequence


class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class DriverCommandError(InfrastructureError):
    """Raised when a machine driver command fails or times out."""
    def __init__(self, command: Sequence[str], output: str, returncode: Optional[int] = None):
        if returncode is None:
            message = f"command {' '.join(command)} timed out"
        else:
            message = f"command {' '.join(command)} exited with status {returncode}: {output.strip()}"
        super().__init__(message, {"command": list(command), "returncode": returncode})
        self.command = list(command)
        self.output = output
        self.returncode = returncode

    @property
    def timed_out(self) -> bool:
        return self.returncode is None

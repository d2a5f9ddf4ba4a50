"""Subprocess execution service for devdb."""

import subprocess
from typing import List, Optional

from devdb.errors import CommandFailedError, DevDBError, MissingDependencyError
from devdb.models import CommandResult


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def __init__(self, logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    def run(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = True,
        timeout: Optional[float] = None,
        cwd: Optional[str] = None,
    ) -> CommandResult:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        effective_timeout = timeout if timeout is not None else self.default_timeout

        try:
            completed = subprocess.run(
                cmd,
                text=True,
                capture_output=capture_output,
                timeout=effective_timeout,
                cwd=cwd,
            )
        except FileNotFoundError as exc:
            raise MissingDependencyError(
                f"Required command not found: {cmd[0]}. Please install it and try again."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandFailedError(
                f"Command timed out after {effective_timeout}s: {cmd_str}"
            ) from exc
        except Exception as exc:
            raise DevDBError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        result = CommandResult(
            command=list(cmd),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if capture_output and result.output:
            self.logger.debug("Command output: %s", result.output)

        if result.success:
            return result

        message = f"Command failed ({result.returncode}): {cmd_str}"
        if result.output:
            message = f"{message}\n{result.output}"

        if check:
            raise CommandFailedError(message)

        self.logger.debug(message)
        return result

    def stream(self, cmd: List[str]) -> CommandResult:
        """Runs a command attached to the terminal until it exits or is interrupted."""
        return self.run(cmd, check=False, capture_output=False)

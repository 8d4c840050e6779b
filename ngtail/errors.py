"""Exceptions raised by pipeline stages.

Every stage failure is a ``PipelineError`` subclass so the controller can
catch one type, move to the aborted state and report a single line.
"""

from __future__ import annotations

from ngtail.utils import STAGE_NAMES


class PipelineError(Exception):
    """Raised when a pipeline stage fails irrecoverably."""

    def __init__(self, stage: int, message: str) -> None:
        self.stage = stage
        self.message = message
        super().__init__(f"Stage {stage} ({STAGE_NAMES.get(stage, '?')}): {message}")


class MissingDependencyError(PipelineError):
    """A required external tool is not installed or does not run."""

    def __init__(self, stage: int, tool: str, install_hint: str) -> None:
        self.tool = tool
        self.install_hint = install_hint
        super().__init__(
            stage, f"{tool} is not installed. Please install it with: {install_hint}"
        )


class ParameterError(PipelineError):
    """User input failed validation."""


class CommandFailedError(PipelineError):
    """A delegated subprocess exited with a non-zero status."""

    def __init__(
        self, stage: int, command: str, returncode: int, detail: str = ""
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.detail = detail
        message = f"Command failed (exit {returncode}): {command}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(stage, message)


class MutationError(PipelineError):
    """A file in the generated project could not be read or written.

    *action* names the failed operation (``"read"`` or ``"write"``).
    """

    def __init__(
        self, stage: int, path: str, reason: str, action: str = "write"
    ) -> None:
        self.path = path
        self.action = action
        super().__init__(stage, f"Could not {action} {path}: {reason}")

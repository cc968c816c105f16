"""Per-session state for one editing session.

The session is an explicit object that the editor hands to every command.
It is not a process-wide singleton, so two editors in one process (as in
the tests) never see each other's state.
"""

from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants


class PromptMode:
    """Constants for the prompt currently shown in the status line."""

    QUIT_CONFIRM = "quit_confirm"


@dataclass
class EditorSession:
    """State that lives exactly as long as one editing session."""

    filename: str
    terminator: str = EditorConstants.DEFAULT_LINE_TERMINATOR
    running: bool = False
    modified: bool = False
    status_message: Optional[str] = None
    prompt_mode: Optional[str] = None

    def clear_status(self) -> None:
        self.status_message = None

"""Main editor controller: one editing session over one file."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .buffer import Document
from .commands import CommandRegistry
from .constants import EditorConstants
from .coordinator import Coordinator
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .session import EditorSession, PromptMode
from .settings import EditorSettings
from .storage import StorageError, read_document, write_document
from .terminal import TerminalInterface
from .view import TerminalTextView

logger = logging.getLogger(__name__)


class Editor:
    """Ties the buffer engine to the terminal and the command registry."""

    def __init__(self, filename: str, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components.

        Args:
            filename: File being edited; it need not exist yet
            settings: Session settings, defaults if omitted
            terminal: Terminal to draw on, a new blessed one if omitted
        """
        self.settings = settings or EditorSettings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.document = Document(self.settings.max_lines, self.settings.max_line_length)
        self.coordinator = Coordinator(
            self.document,
            width=self.terminal.width,
            height=self.terminal.height,
            scroll_mode=self.settings.scroll_mode,
        )
        self.view = TerminalTextView(self.coordinator)
        self.command_registry = CommandRegistry()
        self.session = EditorSession(
            filename=filename,
            terminator=self.settings.line_terminator or EditorConstants.DEFAULT_LINE_TERMINATOR,
        )
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def load_file(self):
        """Load the session file into a fresh document.

        Raises:
            StorageError: the file exists but cannot be loaded.
        """
        loaded = read_document(
            self.session.filename, self.settings.max_lines, self.settings.max_line_length
        )
        self.document = loaded.document
        self.coordinator.document = loaded.document
        self.coordinator.reset()
        if self.settings.line_terminator is None and loaded.terminator is not None:
            self.session.terminator = loaded.terminator
        self.session.modified = False

    def save_file(self) -> bool:
        """Write the document to the session file.

        Returns:
            True if the save succeeded. On failure the error is left in the
            status line.
        """
        try:
            write_document(self.session.filename, self.document, self.session.terminator)
        except StorageError as e:
            self.session.status_message = str(e)
            return False
        self.session.modified = False
        return True

    def handle_save(self):
        """Handle Ctrl-S save command."""
        if self.save_file():
            self.session.status_message = EditorConstants.SAVED_MESSAGE.format(self.session.filename)
        else:
            self.bell()

    def request_quit(self):
        """Quit, asking first if there are unsaved changes."""
        if self.session.modified:
            self.session.prompt_mode = PromptMode.QUIT_CONFIRM
        else:
            self.session.running = False

    def close(self):
        """Release the resize pipe. Calling it again does nothing."""
        if self._resize_pipe_r is None:
            return
        os.close(self._resize_pipe_r)
        os.close(self._resize_pipe_w)
        self._resize_pipe_r = self._resize_pipe_w = None

    def bell(self):
        self.terminal.bell()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def handle_key_event(self, key_event: KeyEvent):
        """Process one key event to completion.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Clear status message on any keypress (except in prompt mode)
        if self.session.status_message and not self.session.prompt_mode:
            self.session.clear_status()

        if self.session.prompt_mode == PromptMode.QUIT_CONFIRM:
            self._handle_quit_confirm(key_event)
            return

        if self.command_registry.execute(self, key_event):
            self.session.modified = True

    def _handle_quit_confirm(self, key_event: KeyEvent):
        """Handle keypress during quit confirmation."""
        self.session.prompt_mode = None
        if key_event.key_type != KeyType.REGULAR:
            return
        char = key_event.value.lower()
        if char == 'y':
            self.handle_save()
            if not self.session.modified:
                self.session.running = False
        elif char == 'n':
            self.session.running = False

    def _status_line(self) -> Optional[str]:
        if self.session.prompt_mode == PromptMode.QUIT_CONFIRM:
            return f" {EditorConstants.QUIT_CONFIRM_MESSAGE} "
        if self.session.status_message:
            return f" {self.session.status_message}"
        return None

    def draw(self):
        """Render the viewport and paint it."""
        self.view.resize(self.terminal.width, self.terminal.height)
        self.view.render()
        self.terminal.update_frame(
            self.view.lines,
            self.view.visual_cursor_y,
            self.view.visual_cursor_x,
            status=self._status_line(),
        )

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.session.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        logger.debug("Editing %s", self.session.filename)

        try:
            with self.terminal.term.cbreak():
                # Disable flow control so Ctrl-S and Ctrl-Q reach the editor
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, OSError) as e:
                    logger.debug("Could not disable flow control: %s", e)

                try:
                    self._event_loop()
                finally:
                    if old_settings:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            self.close()
            self.terminal.cleanup()

    def _event_loop(self):
        need_draw = True
        while self.session.running:
            if need_draw:
                self.draw()
                need_draw = False

            # Wait for input on stdin or resize pipe
            ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

            if self._resize_pipe_r in ready:
                os.read(self._resize_pipe_r, 1024)
                self.terminal.invalidate_frame()
                need_draw = True
            elif 0 in ready:
                key_event = self.keyboard.get_key_event(timeout=0)
                if key_event:
                    self.handle_key_event(key_event)
                    need_draw = True

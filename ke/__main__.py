"""ke CLI entry point.

Allows running via `python -m ke` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .constants import EditorConstants
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.")
                break
            print(f"type={ev.key_type.value} value={_escape_bytes(ev.value)} raw='{_escape_bytes(ev.raw)}'")
    finally:
        term.cleanup()


def configure_logging() -> Path:
    """Send debug logs to a file; the screen belongs to the editor."""
    import platformdirs

    log_dir = Path(platformdirs.user_log_dir("ke"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "ke.log"
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    return log_file


def main(argv: list[str] | None = None) -> int:
    # Very small arg parsing: version, keyboard test, debug logging and one filename
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0
    if args and args[0] == '--debug':
        configure_logging()
        args = args[1:]
    if len(args) != 1:
        print(EditorConstants.USAGE_MESSAGE)
        return 2

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .settings import load_settings
    from .storage import StorageError

    editor = Editor(args[0], settings=load_settings())
    try:
        editor.load_file()
        editor.run()
    except StorageError as e:
        print(e, file=sys.stderr)
        return 1
    finally:
        editor.close()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

import logging
import shutil
import subprocess
import sys
from collections.abc import Callable

logger = logging.getLogger(__name__)

CLIPBOARD_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


def clipboard_command() -> list[str] | None:
    for command in CLIPBOARD_COMMANDS:
        if shutil.which(command[0]):
            return command
    return None


def show_for_manual_copy(text: str) -> bool:
    print("Clipboard unavailable; select and copy the text below:", file=sys.stderr)
    print(text)
    return False


def copy_text(text: str, manual_fallback: Callable[[str], bool] = show_for_manual_copy) -> bool:
    """Copy ``text`` to the system clipboard.

    Without a clipboard command the text goes to ``manual_fallback``, whose
    return value is passed through.
    """
    value = str(text or "")
    if not value:
        return False

    command = clipboard_command()
    if command is None:
        logger.info("clipboard.unavailable fallback=manual")
        return manual_fallback(value)

    try:
        subprocess.run(command, input=value, text=True, check=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("clipboard.failed command=%s type=%s", command[0], exc.__class__.__name__)
        return manual_fallback(value)
    logger.info("clipboard.copied command=%s chars=%d", command[0], len(value))
    return True

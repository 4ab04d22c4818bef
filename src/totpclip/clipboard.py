"""
Clipboard writers. Copying is best-effort: callers catch ClipboardError,
warn, and keep the code they already generated.
"""
import logging
import shutil
import subprocess
import sys
from typing import Callable, Optional, Sequence

import pyperclip

from .exceptions import ClipboardError

log = logging.getLogger(__name__)


class Clipboard(object):
    """
    Something the code can be written to.
    """

    name = "clipboard"

    def write(self, text: str) -> None:
        raise NotImplementedError


class CommandClipboard(Clipboard):
    """
    Pipes the text into a platform clipboard utility.
    """

    def __init__(self, *command: str) -> None:
        self.command: Sequence[str] = command
        self.name = command[0]

    def write(self, text: str) -> None:
        log.debug("Copying to clipboard with %s", " ".join(self.command))
        try:
            subprocess.run(self.command, input=text, text=True, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise ClipboardError("{} is not installed".format(self.name)) from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or "exit status {}".format(e.returncode)
            raise ClipboardError("{} failed: {}".format(self.name, detail)) from e


class PyperclipClipboard(Clipboard):
    """
    Falls back on pyperclip for platforms without a known utility.
    """

    name = "pyperclip"

    def write(self, text: str) -> None:
        log.debug("Copying to clipboard with pyperclip")
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e


def select_clipboard(
    platform: Optional[str] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> Clipboard:
    """
    Picks the clipboard writer for the running platform.

    :param platform: a sys.platform value, defaults to the current one
    :param which: lookup used to find utilities on PATH
    :returns: a Clipboard
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return CommandClipboard("pbcopy")
    if platform.startswith("linux"):
        if which("xclip"):
            return CommandClipboard("xclip", "-selection", "clipboard")
        if which("xsel"):
            return CommandClipboard("xsel", "--clipboard", "--input")
        log.debug("Neither xclip nor xsel found, using pyperclip")
    elif platform in ("win32", "cygwin"):
        return CommandClipboard("cmd", "/c", "clip")
    return PyperclipClipboard()

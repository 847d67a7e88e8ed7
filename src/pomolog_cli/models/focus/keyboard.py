"""Non-blocking single-key input for the timer controls."""

import sys
from typing import Optional


class KeyboardHandler:
    """Reads keypresses from a POSIX terminal without blocking."""

    def __init__(self):
        self.old_settings = None
        self.fd: Optional[int] = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode when stdin is a tty."""
        if not sys.stdin.isatty():
            return

        import termios
        import tty

        self.fd = sys.stdin.fileno()
        self.old_settings = termios.tcgetattr(self.fd)
        tty.setcbreak(self.fd)

    def get_key(self) -> Optional[str]:
        """Return the pressed key in lower case, or None if nothing is waiting."""
        if self.fd is None:
            return None

        import select

        if select.select([sys.stdin], [], [], 0)[0]:
            return sys.stdin.read(1).lower()
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is not None:
            import termios

            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None


class WindowsKeyboardHandler:
    """Keyboard handler for Windows using msvcrt."""

    def __init__(self):
        import msvcrt

        self.msvcrt = msvcrt

    def get_key(self) -> Optional[str]:
        if self.msvcrt.kbhit():
            key = self.msvcrt.getwch()
            return key.lower()
        return None

    def stop(self):
        """No cleanup needed on Windows."""


def create_keyboard_handler():
    """Pick the handler for the current platform."""
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()

"""Terminal Output Formatting Package"""

import sys
import os
import threading


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'
    MAGENTA = '\033[35m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except (AttributeError, OSError):
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
ARROW = '→' if UNICODE_ENABLED else '->'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return _colorize(text, Colors.GREEN)


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning('⚠')} {warning(message)}" if UNICODE_ENABLED else f"[!] {message}", file=sys.stderr)


STATUS_COLORS = {
    'ADD': Colors.GREEN,
    'MOD': Colors.YELLOW,
    'DEL': Colors.RED,
}


def colorize_status(status: str) -> str:
    """Color an ADD/MOD/DEL tag."""
    color = STATUS_COLORS.get(status)
    if not color:
        return status
    return _colorize(status, Colors.BOLD, color)


class Spinner:
    """Animated spinner for long operations. Use as context manager."""
    FRAMES_UNICODE = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']

    def __init__(self, label: str = ""):
        self.label = label
        self._thread = None
        self._stop_event = threading.Event()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII

    def _spin(self):
        idx = 0
        while not self._stop_event.is_set():
            frame = self._frames[idx % len(self._frames)]
            print(f'\r\033[K{frame} {self.label}', end='', flush=True)
            idx += 1
            self._stop_event.wait(0.08)

    def __enter__(self):
        if sys.stdout.isatty():
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *args):
        self._stop_event.set()
        if self._thread:
            self._thread.join()
        if sys.stdout.isatty():
            print('\r\033[K', end='', flush=True)


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "ARROW",
    "success", "error", "warning", "info", "dim", "bold",
    "print_success", "print_error", "print_warning",
    "colorize_status", "Spinner", "STATUS_COLORS",
]

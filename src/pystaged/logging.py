# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Final

from rich.text import Text

from .console import detect_tty, get_console_manager

ANSI: Final[dict[str, str]] = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "blue": "\033[34;1m",
    "cyan": "\033[36;1m",
    "red": "\033[31;1m",
    "bright_red": "\033[91m",
    "green": "\033[32;1m",
    "yellow": "\033[33;1m",
}

ROOT_LOGGER_NAME: Final[str] = "pystaged"


@dataclass(frozen=True, slots=True)
class Symbols:
    """Glyphs prefixed to task outcome messages."""

    success: str
    warning: str
    error: str
    info: str


EMOJI_SYMBOLS: Final[Symbols] = Symbols(success="✔", warning="⚠", error="✖", info="ℹ")
ASCII_SYMBOLS: Final[Symbols] = Symbols(success="√", warning="‼", error="×", info="i")


def get_symbols(use_emoji: bool = True) -> Symbols:
    """Return the glyph set matching the caller's emoji preference.

    Args:
        use_emoji: Flag indicating whether unicode glyphs may be used.

    Returns:
        Symbols: Unicode glyphs when enabled, otherwise ASCII fallbacks.
    """

    return EMOJI_SYMBOLS if use_emoji else ASCII_SYMBOLS


def colorize(text: str, code: str, enable: bool) -> str:
    """Apply ANSI colour codes to ``text`` when colouring is enabled.

    Args:
        text: Message text that may be colourised.
        code: ANSI colour identifier from :data:`ANSI`.
        enable: Flag indicating whether colour output is requested.

    Returns:
        str: Colourised text when colouring is enabled and supported; otherwise the original text.
    """

    if not enable or not detect_tty():
        return text
    return f"{ANSI.get(code, '')}{text}{ANSI['reset']}"


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def echo(msg: str, *, use_color: bool | None = None) -> None:
    """Print ``msg`` verbatim, preserving any ANSI sequences it already carries."""

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=False)
    console.print(Text.from_ansi(msg) if color_enabled else Text(msg))


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(msg, style="green", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def configure_debug_logging() -> logging.Logger:
    """Stream debug records of every ``pystaged`` logger to stderr.

    Repeated calls are no-ops once the handler is attached.

    Returns:
        logging.Logger: The package root logger.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if getattr(logger, "_pystaged_debug_configured", False):
        return logger
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_pystaged_debug_configured", True)
    return logger


__all__ = [
    "ASCII_SYMBOLS",
    "EMOJI_SYMBOLS",
    "Symbols",
    "colorize",
    "configure_debug_logging",
    "echo",
    "emoji",
    "fail",
    "get_symbols",
    "ok",
]

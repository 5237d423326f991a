"""Clipboard utilities for the CLI frontend.

Uses pyperclip for cross-platform clipboard access, so recovered secrets can
be pasted without echoing them to the terminal.
"""

from __future__ import annotations

import pyperclip

from seedvault.core.exceptions import ClipboardError


def copy_to_clipboard(text: str) -> None:
    """Copy text to the system clipboard.

    Raises:
        ClipboardError: If no clipboard mechanism is available.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(f"clipboard unavailable: {e}") from e

"""Interactive terminal input: free-text prompts and arrow-key selection.

prompt_choice() puts the terminal in raw mode for the lifetime of one
call. The raw_mode() guard restores the saved terminal attributes on
every exit path, including the Ctrl+C byte which ends the process.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Generic, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.text import Text

T = TypeVar("T")

# Conventional status for a process ended by SIGINT
INTERRUPT_EXIT_CODE = 130

_console = Console()


class Key(str, Enum):
    """Keys understood by the selection prompt."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    INTERRUPT = "interrupt"


# Longest sequences first so "\x1b[A" is not read as a bare ESC
_KEY_SEQUENCES: tuple[tuple[bytes, Key], ...] = (
    (b"\x1b[A", Key.UP),
    (b"\x1bOA", Key.UP),
    (b"\x1b[B", Key.DOWN),
    (b"\x1bOB", Key.DOWN),
    (b"\r", Key.ENTER),
    (b"\n", Key.ENTER),
    (b"\x03", Key.INTERRUPT),
)


def decode_keys(data: bytes) -> list[Key]:
    """Split a raw read into recognized keys, dropping everything else.

    A single read may carry several key presses (fast typing, pasted
    input, or a pipe), so the buffer is scanned rather than matched whole.
    Unrecognized CSI/SS3 sequences (e.g. left/right arrows) are skipped
    as a unit.
    """
    keys: list[Key] = []
    i = 0
    while i < len(data):
        for sequence, key in _KEY_SEQUENCES:
            if data.startswith(sequence, i):
                keys.append(key)
                i += len(sequence)
                break
        else:
            if data[i] == 0x1B and data[i + 1 : i + 2] in (b"[", b"O"):
                i += 3
            else:
                i += 1
    return keys


@contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    """Disable line buffering, echo and signal keys on fd for the block.

    Output post-processing is left on so newlines still return the
    carriage. On a non-tty (pipe, CI) this is a no-op.
    """
    if not os.isatty(fd):
        yield
        return

    import termios

    saved = termios.tcgetattr(fd)
    mode = termios.tcgetattr(fd)
    mode[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG)
    mode[6][termios.VMIN] = 1
    mode[6][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSAFLUSH, mode)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


@dataclass(frozen=True)
class Choice(Generic[T]):
    """One selectable entry: what is shown and what is returned."""

    label: str
    value: T


@dataclass(frozen=True)
class SelectionState(Generic[T]):
    """Items plus the highlighted index, always within bounds."""

    items: tuple[Choice[T], ...]
    cursor: int = 0

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("Selection needs at least one item")
        if not 0 <= self.cursor < len(self.items):
            raise ValueError(f"Cursor {self.cursor} out of range for {len(self.items)} items")

    @property
    def current(self) -> Choice[T]:
        return self.items[self.cursor]

    def moved(self, delta: int) -> SelectionState[T]:
        """Move the highlight, clamped to the first and last item (no wrap)."""
        cursor = min(max(self.cursor + delta, 0), len(self.items) - 1)
        if cursor == self.cursor:
            return self
        return replace(self, cursor=cursor)


def apply_key(state: SelectionState[T], key: Key) -> tuple[SelectionState[T], bool]:
    """Advance the selection state machine by one key.

    Returns:
        (new_state, committed). Interrupt is not handled here; the caller
        owns process termination.
    """
    if key is Key.UP:
        return state.moved(-1), False
    if key is Key.DOWN:
        return state.moved(1), False
    if key is Key.ENTER:
        return state, True
    return state, False


def _render(console: Console, state: SelectionState, repaint: bool) -> None:
    if repaint:
        # Back to the first list line, then clear to end of screen
        console.file.write(f"\x1b[{len(state.items)}A\x1b[J")
        console.file.flush()
    for index, item in enumerate(state.items):
        if index == state.cursor:
            line = Text(f"> {item.label}", style="bold cyan")
        else:
            line = Text(f"  {item.label}")
        console.print(line, no_wrap=True, overflow="ellipsis", crop=True)


def prompt_choice(
    label: str,
    items: Sequence[Choice[T]],
    *,
    console: Console | None = None,
    fd: int | None = None,
    default_index: int = 0,
) -> T:
    """Render items as a list and let the user pick one with arrows + Enter.

    Args:
        label: Question shown above the list.
        items: Choices in display order.
        console: Output console (defaults to stdout).
        fd: Input file descriptor (defaults to stdin).
        default_index: Initially highlighted item.

    Returns:
        The value of the committed item.

    Raises:
        SystemExit: On Ctrl+C or end of input, after the terminal mode
            has been restored.
    """
    console = console or _console
    fd = sys.stdin.fileno() if fd is None else fd
    state = SelectionState(items=tuple(items), cursor=default_index)

    console.print(f"[bold]{escape(label)}[/bold]")
    console.print("[cyan]Use ↑ ↓ and Enter[/cyan]")
    _render(console, state, repaint=False)

    with raw_mode(fd):
        while True:
            data = os.read(fd, 32)
            if not data:
                raise SystemExit(INTERRUPT_EXIT_CODE)
            for key in decode_keys(data):
                if key is Key.INTERRUPT:
                    raise SystemExit(INTERRUPT_EXIT_CODE)
                new_state, committed = apply_key(state, key)
                if committed:
                    console.print()
                    return state.current.value
                if new_state is not state:
                    state = new_state
                    _render(console, state, repaint=True)


def prompt_text(
    label: str,
    default: str = "",
    *,
    required: bool = False,
    validate: Callable[[str], str | None] | None = None,
    console: Console | None = None,
) -> str:
    """Read one line; empty input resolves to default.

    Re-asks with a message until the value is non-empty (when required)
    and the validator returns None. Ctrl+C or end of input ends the
    process with status 130.
    """
    console = console or _console
    suffix = f" ({default})" if default else ""
    while True:
        try:
            raw = console.input(f"[bold]{escape(label)}[/bold]{escape(suffix)}: ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            raise SystemExit(INTERRUPT_EXIT_CODE) from None

        value = raw.strip() or default

        if required and not value.strip():
            console.print("[red]This value is required.[/red]")
            continue

        if validate is not None:
            message = validate(value)
            if message:
                console.print(f"[red]{escape(message)}[/red]")
                continue

        return value


def confirm(label: str, *, default: bool = False, console: Console | None = None, fd: int | None = None) -> bool:
    """Yes/no question answered through prompt_choice."""
    items = [Choice("No", False), Choice("Yes", True)]
    return prompt_choice(label, items, console=console, fd=fd, default_index=1 if default else 0)

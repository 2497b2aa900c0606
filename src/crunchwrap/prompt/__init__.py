"""crunchwrap prompt - interactive terminal input engine."""

from crunchwrap.prompt.terminal import (
    Choice,
    Key,
    SelectionState,
    confirm,
    decode_keys,
    prompt_choice,
    prompt_text,
    raw_mode,
)

__all__ = [
    "Choice",
    "Key",
    "SelectionState",
    "confirm",
    "decode_keys",
    "prompt_choice",
    "prompt_text",
    "raw_mode",
]

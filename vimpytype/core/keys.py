"""
Key token vocabulary.

A token is the atomic unit of input delivered by the host:
- a single displayable character ("j", "%", " ")
- a named control token ("Escape", "Backspace", "Enter")
- a modified token ("Ctrl+d")

Target sequences are written in a compact notation where ``<Name>`` stands
for a named token and every other character is a token by itself:

    "jjw"            -> ("j", "j", "w")
    "wcwn<Esc>"      -> ("w", "c", "w", "n", "Escape")
    "/total<Enter>"  -> ("/", "t", "o", "t", "a", "l", "Enter")
    "Ctrl+d"         -> ("Ctrl+d",)
"""

from __future__ import annotations

import re

ESCAPE = "Escape"
BACKSPACE = "Backspace"
ENTER = "Enter"
ADVANCE = " "

MODIFIER_KEYS = frozenset({"Control", "Shift", "Alt", "Meta"})

# Aliases accepted inside <...> in sequence notation
NAMED_TOKENS: dict[str, str] = {
    "esc": ESCAPE,
    "escape": ESCAPE,
    "bs": BACKSPACE,
    "backspace": BACKSPACE,
    "enter": ENTER,
    "cr": ENTER,
    "return": ENTER,
    "space": ADVANCE,
    "lt": "<",
}

_MODIFIED_TOKEN = re.compile(r"^(Ctrl|Alt|Meta)\+(.)$")
_ANGLE_TOKEN = re.compile(r"<([^<>\s]+)>")
_ANGLE_MODIFIED = re.compile(r"^([CAM])-(.)$", re.IGNORECASE)

_MODIFIER_PREFIXES = {"c": "Ctrl", "a": "Alt", "m": "Meta"}


def modified_token(modifier: str, char: str) -> str:
    """Combine a modifier name and a base character into one token."""
    return f"{modifier}+{char}"


def is_modified(token: str) -> bool:
    return bool(_MODIFIED_TOKEN.match(token))


def is_printable(token: str) -> bool:
    """True for tokens that insert-mode typing turns into buffer text."""
    return len(token) == 1 and token.isprintable()


def _resolve_angle(name: str) -> str | None:
    alias = NAMED_TOKENS.get(name.lower())
    if alias is not None:
        return alias
    match = _ANGLE_MODIFIED.match(name)
    if match:
        return modified_token(_MODIFIER_PREFIXES[match.group(1).lower()], match.group(2))
    if name[0].isupper() and name.isalpha():
        # Already a canonical named token such as <Escape>
        return name
    return None


def parse_sequence(notation: str) -> tuple[str, ...]:
    """
    Split sequence notation into tokens.

    Unknown ``<...>`` groups are kept as literal characters so that text such
    as ``a<b`` still parses.
    """
    if _MODIFIED_TOKEN.match(notation):
        return (notation,)

    tokens: list[str] = []
    pos = 0
    while pos < len(notation):
        if notation[pos] == "<":
            match = _ANGLE_TOKEN.match(notation, pos)
            if match:
                resolved = _resolve_angle(match.group(1))
                if resolved is not None:
                    tokens.append(resolved)
                    pos = match.end()
                    continue
        tokens.append(notation[pos])
        pos += 1
    return tuple(tokens)


def format_sequence(tokens: tuple[str, ...] | list[str]) -> str:
    """Inverse of parse_sequence, used for display."""
    parts = []
    for token in tokens:
        if token == ESCAPE:
            parts.append("<Esc>")
        elif token == BACKSPACE:
            parts.append("<BS>")
        elif token == ENTER:
            parts.append("<Enter>")
        elif is_modified(token) and len(tokens) > 1:
            modifier, char = token.split("+", 1)
            parts.append(f"<{modifier[0]}-{char}>")
        elif token == "<":
            parts.append("<lt>")
        else:
            parts.append(token)
    return "".join(parts)

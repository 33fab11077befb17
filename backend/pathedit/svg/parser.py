"""Path descriptor tokenizer — raw SVG path data → list of Command records.

Only lexical work happens here: numbers are split into fixed-arity argument
groups per command letter. Coordinates stay exactly as written (relative
commands remain relative); resolving them is the normalizer's job.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Command letter, or an SVG number (sign, decimals, exponent).
# "1.5.5" scans as "1.5" ".5"; "10-5" scans as "10" "-5".
_TOKEN_RE = re.compile(
    r"([A-Za-z])|([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
)

# Argument count per command kind (case-insensitive).
ARITY: dict[str, int] = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "A": 7,
    "Z": 0,
}

# Positions of the large-arc and sweep flags inside an arc argument group.
_ARC_FLAG_SLOTS = (3, 4)


@dataclass(frozen=True)
class Command:
    """A single path command: its letter and numeric arguments."""

    kind: str
    args: tuple[float, ...] = ()

    @property
    def upper(self) -> str:
        return self.kind.upper()

    @property
    def is_relative(self) -> bool:
        return self.kind.islower()

    @property
    def is_known(self) -> bool:
        return self.upper in ARITY


def tokenize_path(d: str) -> list[Command]:
    """Split a path descriptor into commands.

    Extra argument groups repeat the command; a moveto's extra pairs become
    linetos of the same relativity. Unknown letters are kept as commands with
    whatever numbers follow them so the caller can decide to drop them.
    """
    commands: list[Command] = []
    kind: str | None = None
    raw: list[str] = []

    for match in _TOKEN_RE.finditer(d or ""):
        letter, number = match.groups()
        if letter:
            if kind is not None:
                commands.extend(_expand(kind, raw))
            kind, raw = letter, []
        elif kind is not None:
            raw.append(number)
        else:
            logger.debug("Ignoring number %s before first command", number)

    if kind is not None:
        commands.extend(_expand(kind, raw))

    return commands


def _expand(kind: str, raw: list[str]) -> list[Command]:
    """Chunk the raw numbers following ``kind`` into fixed-arity commands."""
    arity = ARITY.get(kind.upper())
    if arity is None:
        return [Command(kind, tuple(float(v) for v in raw))]

    if arity == 0:
        if raw:
            logger.debug("Ignoring %d stray arguments after %s", len(raw), kind)
        return [Command(kind)]

    if kind.upper() == "A":
        raw = _split_arc_flags(raw)
    values = [float(v) for v in raw]

    groups: list[Command] = []
    for i in range(0, len(values) - arity + 1, arity):
        group_kind = kind
        if i and kind in "Mm":
            group_kind = "L" if kind == "M" else "l"
        groups.append(Command(group_kind, tuple(values[i : i + arity])))

    leftover = len(values) % arity
    if leftover or not groups:
        logger.debug(
            "Discarding %d trailing arguments of %s (needs %d)",
            leftover if groups else len(values),
            kind,
            arity,
        )
    return groups


def _split_arc_flags(raw: list[str]) -> list[str]:
    """Separate compactly written arc flags, e.g. ``0 011 1`` → ``0 0 1 1 1``."""
    out: list[str] = []
    pending = list(reversed(raw))
    while pending:
        token = pending.pop()
        if len(out) % 7 in _ARC_FLAG_SLOTS and len(token) > 1 and token[0] in "01":
            out.append(token[0])
            pending.append(token[1:])
        else:
            out.append(token)
    return out

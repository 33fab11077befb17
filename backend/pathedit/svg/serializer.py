"""Write path descriptors back out from Command records."""

from __future__ import annotations

from collections.abc import Iterable

from pathedit.svg.parser import Command, tokenize_path

# Which arguments of each command are lengths (scaled by scale_path).
# Arc rotation and flags are not.
_SCALED_ARGS: dict[str, tuple[bool, ...]] = {
    "A": (True, True, False, False, False, True, True),
}


def format_number(value: float, precision: int = 6) -> str:
    """Fixed precision, trailing zeros and dot stripped, no negative zero."""
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_command(command: Command, precision: int = 6) -> str:
    if not command.args:
        return command.kind
    args = " ".join(format_number(v, precision) for v in command.args)
    return f"{command.kind} {args}"


def format_path(commands: Iterable[Command], precision: int = 6) -> str:
    """Serialize commands as a space separated descriptor."""
    return " ".join(format_command(c, precision) for c in commands)


def scale_path(d: str, scale: float, precision: int = 6) -> str:
    """Multiply every coordinate and radius of a descriptor by ``scale``.

    Relative commands stay relative; unknown commands are written unchanged.
    Used to move descriptors between image space and client space.
    """
    scaled: list[Command] = []
    for command in tokenize_path(d):
        if not command.is_known:
            scaled.append(command)
            continue
        mask = _SCALED_ARGS.get(command.upper)
        args = tuple(
            v * scale if mask is None or mask[i] else v
            for i, v in enumerate(command.args)
        )
        scaled.append(Command(command.kind, args))
    return format_path(scaled, precision)

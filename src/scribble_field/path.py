"""Typed path commands and their SVG path-data codec.

Commands (absolute coordinates only):
    MoveTo(x, y)                      → "M x y"
    QuadraticCurveTo(cx, cy, x, y)    → "Q cx cy, x y"
    SmoothCurveTo(x, y)               → "T x y"

Coordinates are rounded to one decimal digit when a command is built, so the
text form is a pure formatting step: format_path(parse_path(d)) == d for any
d produced here.

Rounding is half away from zero on the exact binary value of the float, which
is what fixed-point formatting of a double does (0.25 → 0.3, -0.25 → -0.3).
Two departures from JavaScript's toFixed: values that round to zero are
written "0.0", never "-0.0" (toFixed keeps the sign, e.g. (-0.04).toFixed(1)
is "-0.0"), and magnitudes of 1e21 and above stay in fixed-point notation
instead of switching to exponent form.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterable, List, Tuple, Union

_ONE_DECIMAL = Decimal("0.1")
_TWO_DECIMALS = Decimal("0.01")
# Wide enough for every finite double (about 310 integer digits)
_EXACT = Context(prec=400)

_TOKEN_RE = re.compile(r"[MQTmqt]|[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_ARITY = {"M": 2, "Q": 4, "T": 2}


def _quantize(value: float, step: Decimal) -> float:
    rounded = float(Decimal(value).quantize(step, rounding=ROUND_HALF_UP, context=_EXACT))
    return rounded + 0.0  # fold -0.0 into 0.0


def round1(value: float) -> float:
    """Round to one decimal digit, half away from zero."""
    return _quantize(value, _ONE_DECIMAL)


def round2(value: float) -> float:
    """Round to two decimal digits, half away from zero."""
    return _quantize(value, _TWO_DECIMALS)


def _fmt(value: float) -> str:
    return f"{value:.1f}"


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float

    @classmethod
    def at(cls, x: float, y: float) -> "MoveTo":
        return cls(round1(x), round1(y))

    def to_svg(self) -> str:
        return f"M {_fmt(self.x)} {_fmt(self.y)}"

    @property
    def end(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class QuadraticCurveTo:
    cx: float
    cy: float
    x: float
    y: float

    @classmethod
    def at(cls, cx: float, cy: float, x: float, y: float) -> "QuadraticCurveTo":
        return cls(round1(cx), round1(cy), round1(x), round1(y))

    def to_svg(self) -> str:
        return f"Q {_fmt(self.cx)} {_fmt(self.cy)}, {_fmt(self.x)} {_fmt(self.y)}"

    @property
    def end(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class SmoothCurveTo:
    """Quadratic continuation; control point mirrors the previous one."""
    x: float
    y: float

    @classmethod
    def at(cls, x: float, y: float) -> "SmoothCurveTo":
        return cls(round1(x), round1(y))

    def to_svg(self) -> str:
        return f"T {_fmt(self.x)} {_fmt(self.y)}"

    @property
    def end(self) -> Tuple[float, float]:
        return (self.x, self.y)


PathCommand = Union[MoveTo, QuadraticCurveTo, SmoothCurveTo]


def format_path(commands: Iterable[PathCommand]) -> str:
    """Serialize commands to SVG path data ("M 1.0 2.0 Q ...")."""
    return " ".join(cmd.to_svg() for cmd in commands)


def parse_path(d: str) -> Tuple[PathCommand, ...]:
    """Parse path data made of absolute M/Q/T commands.

    Parameters
    ----------
    d : str
        SVG path data; commas and whitespace both separate numbers, and a
        command letter may be followed by several coordinate groups.

    Returns
    -------
    tuple of PathCommand
        Parsed commands, coordinates rounded to one decimal

    Raises
    ------
    ValueError
        On relative or unsupported commands, stray characters, a missing
        leading M, or a truncated coordinate group
    """
    leftover = _TOKEN_RE.sub(" ", d).replace(",", " ").strip()
    if leftover:
        raise ValueError(f"Unsupported path data near {leftover[:20]!r} in {d!r}")

    tokens = _TOKEN_RE.findall(d)
    commands: List[PathCommand] = []
    i = 0
    letter = None
    while i < len(tokens):
        tok = tokens[i]
        if tok.isalpha():
            if tok.islower():
                raise ValueError(f"Relative command '{tok}' not supported (absolute M/Q/T only)")
            letter = tok
            i += 1
            continue
        if letter is None:
            raise ValueError(f"Path data must start with a command, got {tok!r}")

        arity = _ARITY[letter]
        group = tokens[i:i + arity]
        if len(group) < arity or any(t.isalpha() for t in group):
            raise ValueError(f"Command '{letter}' expects {arity} numbers in {d!r}")
        nums = [float(t) for t in group]
        i += arity

        if letter == "M":
            commands.append(MoveTo.at(*nums))
        elif letter == "Q":
            commands.append(QuadraticCurveTo.at(*nums))
        else:
            commands.append(SmoothCurveTo.at(*nums))

    if commands and not isinstance(commands[0], MoveTo):
        raise ValueError(f"Path data must begin with M, got {d!r}")
    return tuple(commands)


def path_points(commands: Iterable[PathCommand]) -> List[Tuple[float, float]]:
    """All coordinates in command order, control points included."""
    points: List[Tuple[float, float]] = []
    for cmd in commands:
        if isinstance(cmd, QuadraticCurveTo):
            points.append((cmd.cx, cmd.cy))
        points.append(cmd.end)
    return points


def subpaths(commands: Iterable[PathCommand]) -> List[Tuple[PathCommand, ...]]:
    """Split at each MoveTo into disjoint sub-paths."""
    groups: List[List[PathCommand]] = []
    for cmd in commands:
        if isinstance(cmd, MoveTo) or not groups:
            groups.append([])
        groups[-1].append(cmd)
    return [tuple(g) for g in groups]

"""Text-level helpers for G-code lines: comments, words, codes and numbers."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from enum import IntEnum


class GCode(IntEnum):
    """G codes the parser recognises."""

    UNKNOWN = 0
    G00 = 1
    G01 = 2
    G38_2 = 3
    G38_3 = 4
    G38_4 = 5
    G38_5 = 6
    G02 = 7
    G03 = 8
    G07 = 9
    G08 = 10
    G17 = 11
    G18 = 12
    G19 = 13
    G20 = 14
    G21 = 15
    G05_1 = 16
    G05_2 = 17
    G90 = 18
    G90_1 = 19
    G91 = 20
    G91_1 = 21


# Text following the leading 'G' mapped to its code.
_GCODE_BODIES: dict[str, GCode] = {
    "0": GCode.G00,
    "1": GCode.G01,
    "2": GCode.G02,
    "3": GCode.G03,
    "7": GCode.G07,
    "8": GCode.G08,
    "00": GCode.G00,
    "01": GCode.G01,
    "02": GCode.G02,
    "03": GCode.G03,
    "07": GCode.G07,
    "08": GCode.G08,
    "17": GCode.G17,
    "18": GCode.G18,
    "19": GCode.G19,
    "20": GCode.G20,
    "21": GCode.G21,
    "90": GCode.G90,
    "91": GCode.G91,
    "5.1": GCode.G05_1,
    "5.2": GCode.G05_2,
    "05.1": GCode.G05_1,
    "05.2": GCode.G05_2,
    "38.2": GCode.G38_2,
    "38.3": GCode.G38_3,
    "38.4": GCode.G38_4,
    "38.5": GCode.G38_5,
    "90.1": GCode.G90_1,
    "91.1": GCode.G91_1,
}

_SPEED_RE = re.compile(r"[Ff]([0-9.]+)")
_COMMENT_RE = re.compile(r"(\([^\(\)]*\)|;[^;].*)")
_DECIMAL_RE = re.compile(r"(\d*\.\d*)")
_GCODES_RE = re.compile(r"[Gg]0*(\d+)")
_MCODES_RE = re.compile(r"[Mm]0*(\d+)")

_WHITESPACE = frozenset(" \t\n\v\f\r")
_NUMERIC = frozenset("0123456789.-+")


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_letter(c: str) -> bool:
    return ("A" <= c <= "Z") or ("a" <= c <= "z")


def _to_double(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def override_speed(command: str, speed: float) -> str:
    """Scale the F word of a command to ``speed`` percent of its value."""
    match = _SPEED_RE.search(command)
    if match is None:
        return command
    original = _to_double(match.group(1))
    replacement = "F%g" % (original / 100.0 * speed)
    return _SPEED_RE.sub(lambda _m: replacement, command)


def remove_comment(command: str) -> str:
    """Cut off a ';' comment and trim the line.

    Of parenthesised text only an empty ``()`` pair directly after the first
    ``(`` is removed; other parenthesised comments are kept.
    """
    pos = command.find("(")
    if pos >= 0:
        pos2 = command.rfind(")", 0, pos + 2)
        length = pos2 - pos + 1
        if length > 0:
            command = command[:pos] + command[pos + length:]

    pos = command.find(";")
    if pos >= 0:
        command = command[:pos]

    return command.strip()


def parse_comment(command: str) -> str:
    """First comment in the line, with its delimiters, or an empty string."""
    match = _COMMENT_RE.search(command)
    return match.group(1) if match else ""


def truncate_decimals(length: int, command: str) -> str:
    """Rewrite every decimal number with exactly ``length`` fraction digits."""
    pos = 0
    match = _DECIMAL_RE.search(command, pos)
    while match is not None:
        start = match.start(0)
        new_num = f"{_to_double(match.group(1)):.{length}f}"
        command = command[:start] + new_num + command[match.end(0):]
        pos = start + len(new_num) + 1
        match = _DECIMAL_RE.search(command, pos)
    return command


def remove_all_whitespace(command: str) -> str:
    """Drop every ASCII whitespace character."""
    return "".join(c for c in command if c not in _WHITESPACE)


def parse_gcode_enum(arg: str) -> GCode:
    """Recognise a single G word such as ``G1``, ``G01`` or ``G38.2``."""
    if not arg or arg[0] not in "Gg":
        return GCode.UNKNOWN
    return _GCODE_BODIES.get(arg[1:], GCode.UNKNOWN)


def parse_codes_enum(args: Iterable[str]) -> list[GCode]:
    """All recognised G codes among the given words, in order."""
    codes = (parse_gcode_enum(arg) for arg in args)
    return [code for code in codes if code is not GCode.UNKNOWN]


def parse_codes(args: Iterable[str], code: str) -> list[float]:
    """Values of every word starting with the letter ``code``, either case."""
    letters = (code, code.lower())
    return [_to_double(s[1:]) for s in args if s and s[0] in letters]


def parse_gcodes(command: str) -> list[int]:
    """Numbers of all G codes in a command line."""
    return [int(m) for m in _GCODES_RE.findall(command)]


def parse_mcodes(command: str) -> list[int]:
    """Numbers of all M codes in a command line."""
    return [int(m) for m in _MCODES_RE.findall(command)]


def split_command(command: str) -> list[str]:
    """Split a line into words such as ``G1`` and ``X10.5``.

    Spaces are not needed between words. Lines starting with '/' give no
    words, a ';' ends the line and parenthesised text is skipped.
    """
    if not command or command[0] == "/":
        return []

    words: list[str] = []
    word: list[str] = []
    n = len(command)
    i = 0
    while i < n:
        c = command[i]
        if c == ";":
            break

        if c == "(":
            while i < n and command[i] != ")":
                i += 1
            if i < n:
                i += 1
            if i == n:
                break
            c = command[i]

        if c in _NUMERIC:
            while i < n and command[i] in _NUMERIC:
                word.append(command[i])
                i += 1
            if i == n:
                break
            words.append("".join(word))
            word.clear()
            c = command[i]

        if _is_letter(c):
            word.append(c)
        i += 1

    if word:
        words.append("".join(word))
    return words


def parse_arg(arg: str, letter: str) -> float | None:
    """Value of a word if it starts with ``letter`` (either case), else None."""
    if arg and arg[0] in (letter, letter.lower()):
        return atof(arg[1:])
    return None


def parse_coord(args: Iterable[str], letter: str) -> float:
    """Value of the first word starting with ``letter``, or NaN."""
    for arg in args:
        value = parse_arg(arg, letter)
        if value is not None:
            return value
    return math.nan


def atof(text: str) -> float:
    """Read a leading decimal number, stopping at the first character that does not belong."""
    if not text:
        return 0.0

    i = 0
    n = len(text)
    while i < n and text[i] in " \t":
        i += 1

    sign = 1
    if i < n and text[i] == "-":
        sign = -1
        i += 1
    elif i < n and text[i] == "+":
        i += 1

    integer_part = 0
    fraction_part = 0
    divisor = 1
    in_fraction = False
    while i < n:
        c = text[i]
        if _is_digit(c):
            if in_fraction:
                fraction_part = fraction_part * 10 + int(c)
                divisor *= 10
            else:
                integer_part = integer_part * 10 + int(c)
        elif c == "." and not in_fraction:
            in_fraction = True
        else:
            break
        i += 1

    return sign * (float(integer_part) + fraction_part / divisor)
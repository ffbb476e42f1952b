"""
Formatting primitives

Stateless rendering rules behind the leaf directives. They work on plain
Python values and raise ValueError for values or parameter combinations
they do not support; the directive handlers translate that into
UnsupportedFormatError with the directive's position.
"""

import math
from decimal import Decimal
from typing import List, Optional, Sequence

from .argument import Formattable


def human_format(argument: Formattable) -> str:
    """~A: natural text form, strings unquoted"""
    return argument.format_human()


def machine_format(argument: Formattable) -> str:
    """~S: machine-readable form, strings quoted and escaped"""
    return argument.format_machine()


def string_pad(
    text: str,
    mincol: int = 0,
    colinc: int = 1,
    minpad: int = 0,
    padchar: str = " ",
    left: bool = False,
) -> str:
    """
    Pad text to at least mincol characters (the ~mincol,colinc,minpad,padcharA rule)

    At least minpad pad characters are added, then more in blocks of colinc
    until the width reaches mincol.

    Example:
        >>> string_pad("ab", 5)
        'ab   '
        >>> string_pad("ab", 5, left=True)
        '   ab'
        >>> string_pad("ab", 5, colinc=4)
        'ab    '
    """
    pad = minpad
    shortfall = mincol - len(text) - pad
    if shortfall > 0:
        pad += math.ceil(shortfall / colinc) * colinc
    if left:
        return padchar * pad + text
    return text + padchar * pad


def digits_group(digits: str, commachar: str = ",", interval: int = 3) -> str:
    """
    Insert commachar between groups of interval digits, counting from the right

    Example:
        >>> digits_group("4200000")
        '4,200,000'
        >>> digits_group("42000", "_", 2)
        '4_20_00'
    """
    head = len(digits) % interval or interval
    groups = [digits[:head]]
    groups.extend(digits[i:i + interval] for i in range(head, len(digits), interval))
    return commachar.join(groups)


def decimal_format(
    number: int,
    mincol: int = 0,
    padchar: str = " ",
    commachar: str = ",",
    comma_interval: int = 3,
    commas: bool = False,
    sign: bool = False,
) -> str:
    """
    ~D: base 10 integer, right-aligned in mincol columns

    Example:
        >>> decimal_format(42, 5)
        '   42'
        >>> decimal_format(-4200, 10, "_", commas=True)
        '____-4,200'
        >>> decimal_format(7, sign=True)
        '+7'
    """
    digits = str(abs(number))
    if commas:
        digits = digits_group(digits, commachar, comma_interval)
    if number < 0:
        digits = "-" + digits
    elif sign:
        digits = "+" + digits
    if len(digits) < mincol:
        digits = padchar * (mincol - len(digits)) + digits
    return digits


def float_shortest(value: float) -> str:
    """
    Shortest round-tripping fixed notation of a non-negative float

    Python's repr switches to exponent notation for very large and very
    small magnitudes; Decimal expands those back to plain digits.

    Example:
        >>> float_shortest(2.5)
        '2.5'
        >>> float_shortest(1e20)
        '100000000000000000000.0'
        >>> float_shortest(1e-05)
        '0.00001'
    """
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


def fixed_format(
    number: float,
    width: Optional[int] = None,
    digits: Optional[int] = None,
    scale: int = 0,
    overflowchar: Optional[str] = None,
    padchar: str = " ",
    sign: bool = False,
) -> str:
    """
    ~F: fixed-point float

    Args:
        number: Value to render
        width: Minimum field width; the value is right-aligned
        digits: Digits after the decimal point (rounded); shortest form if None
        scale: Render number * 10**scale
        overflowchar: Fill the field with this when the value does not fit
        padchar: Left padding character
        sign: Always print a sign

    Raises:
        ValueError: For NaN, infinities (before or after scaling), or a width
                    without digits (the adaptive form is not implemented)

    Example:
        >>> fixed_format(3.14159, digits=2)
        '3.14'
        >>> fixed_format(3.14159, 8, 3)
        '   3.142'
        >>> fixed_format(0.5, 3, 2)
        '.50'
        >>> fixed_format(1234.5, 4, 1)
        '1234.5'
    """
    if width is not None and digits is None:
        raise ValueError("a field width needs an explicit digit count (adaptive ~wF is not supported)")

    value = number
    if scale:
        try:
            value = number * 10 ** scale
        except OverflowError as error:
            raise ValueError(f"scaling {number!r} by 10**{scale} overflows") from error
    if not math.isfinite(value):
        raise ValueError(f"cannot render {number!r} scaled by 10**{scale} in fixed notation")

    if digits is None:
        body = float_shortest(abs(value))
    else:
        body = f"{abs(value):#.{digits}f}"

    prefix = "-" if value < 0 else ("+" if sign else "")
    text = prefix + body

    if width is not None and len(text) > width:
        if body.startswith("0.") and len(text) - 1 <= width:
            text = prefix + body[1:]
        elif overflowchar is not None:
            return overflowchar * width
    if width is not None and len(text) < width:
        text = padchar * (width - len(text)) + text
    return text


def justify(
    segments: Sequence[str],
    mincol: int = 0,
    colinc: int = 1,
    minpad: int = 0,
    padchar: str = " ",
    pad_before: bool = False,
    pad_after: bool = False,
) -> str:
    """
    ~<...~>: spread padding between text segments to fill a column width

    Pad points are the gaps between segments, plus one before the first
    segment when pad_before is set and one after the last when pad_after
    is set. A single segment with no pad points is right-justified. The
    width is mincol, or mincol plus the least multiple of colinc that holds
    the text and minpad characters per pad point. Padding is divided over
    the pad points from left to right; later points take the remainder.

    Example:
        >>> justify(["foo"], 10)
        '       foo'
        >>> justify(["foo", "bar"], 10)
        'foo    bar'
        >>> justify(["foo"], 10, pad_before=True, pad_after=True)
        '   foo    '
    """
    gaps = max(len(segments) - 1, 0) + int(pad_before) + int(pad_after)
    if gaps == 0:
        pad_before = True
        gaps = 1

    text_length = sum(len(segment) for segment in segments)
    chars = text_length + gaps * minpad
    if chars > mincol:
        length = mincol + math.ceil((chars - mincol) / colinc) * colinc
    else:
        length = mincol
    padding = length - text_length

    parts: List[str] = []

    def padding_emit() -> None:
        nonlocal padding, gaps
        pad_length = padding // gaps
        padding -= pad_length
        gaps -= 1
        parts.append(padchar * pad_length)

    if pad_before:
        padding_emit()
    for index, segment in enumerate(segments):
        parts.append(segment)
        if index < len(segments) - 1:
            padding_emit()
    if pad_after:
        padding_emit()
    return "".join(parts)

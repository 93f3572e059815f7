"""Number representations: radix conversion, byte subtraction and IEEE-754 bits.

Bit strings are written most significant bit first. Single-precision
values use 32 characters (1 sign, 8 exponent, 23 fraction bits); double
precision is shown as ``s_eeeeeeeeeee_ffff...`` with 1, 11 and 52 bits.
"""

from __future__ import annotations

import argparse
import math
import random
import struct
import sys
from typing import Callable, Dict, Optional, Sequence, Tuple

_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_WORD_MASK = (1 << 64) - 1
_BYTE_MASK = 0xFF


def _check_base(base: int) -> None:
    if not 2 <= base <= len(_DIGITS):
        raise ValueError(f"base must be between 2 and {len(_DIGITS)}, got {base}")


def to_integer(digits: str, base: int) -> int:
    """Return the value of ``digits`` written in ``base``.

    Digits above 9 are the upper-case letters A to Z. The result wraps
    modulo 2**64, as in a 64-bit register.
    """
    _check_base(base)
    value = 0
    for char in digits:
        digit = _DIGITS.find(char)
        if digit < 0 or digit >= base:
            raise ValueError(f"invalid digit {char!r} for base {base}")
        value = value * base + digit
    return value & _WORD_MASK


def from_integer(value: int, base: int) -> str:
    """Return the digits of a non-negative ``value`` in ``base``.

    Zero has no significant digits, so it yields the empty string.
    """
    _check_base(base)
    if value < 0:
        raise ValueError("value must not be negative")
    digits = []
    while value:
        value, digit = divmod(value, base)
        digits.append(_DIGITS[digit])
    return "".join(reversed(digits))


def convert(digits: str, source_base: int, dest_base: int) -> str:
    """Rewrite ``digits`` from ``source_base`` into ``dest_base``."""
    return from_integer(to_integer(digits, source_base), dest_base)


def _check_bits(bits: str, width: int) -> str:
    if len(bits) != width or not set(bits) <= {"0", "1"}:
        raise ValueError(f"expected {width} binary digits, got {bits!r}")
    return bits


def subtract_bytes(minuend: str, subtrahend: str) -> str:
    """Subtract two 8-bit strings by adding the two's complement of the second.

    The difference wraps around modulo 256 and is returned as 8 bits.
    """
    m = int(_check_bits(minuend, 8), 2)
    s = int(_check_bits(subtrahend, 8), 2)
    negated = (~s + 1) & _BYTE_MASK
    return format((m + negated) & _BYTE_MASK, "08b")


def bits_to_float(bits: str) -> float:
    """Decode 32 single-precision bits as ``sign * 1.fraction * 2**(exp - 127)``.

    The exponent field is always read as normalised, with the implicit
    leading one, and the result is computed in double precision.
    """
    bits = _check_bits(bits, 32)
    sign = -1.0 if bits[0] == "1" else 1.0
    exponent = int(bits[1:9], 2) - 127
    mantissa = 1 + int(bits[9:], 2) / (1 << 23)
    return sign * math.ldexp(mantissa, exponent)


def _to_single(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _encode(value: float, exp_bits: int, frac_bits: int) -> Tuple[int, int, int]:
    """Split ``value`` into IEEE-754 sign, exponent and fraction fields."""
    sign = 1 if math.copysign(1.0, value) < 0 else 0
    all_ones = (1 << exp_bits) - 1
    bias = (1 << (exp_bits - 1)) - 1
    magnitude = abs(value)
    if math.isnan(value):
        return sign, all_ones, 1 << (frac_bits - 1)
    if math.isinf(value):
        return sign, all_ones, 0
    if magnitude < math.ldexp(1.0, 1 - bias):
        return sign, 0, int(math.ldexp(magnitude, bias - 1 + frac_bits))
    mantissa, power = math.frexp(magnitude)
    fraction = int(math.ldexp(mantissa, frac_bits + 1)) - (1 << frac_bits)
    return sign, power - 1 + bias, fraction


def double_to_bits(value: float) -> str:
    """Return the double-precision fields of ``value`` as ``s_exp_frac``."""
    sign, exponent, fraction = _encode(float(value), 11, 52)
    return f"{sign}_{exponent:011b}_{fraction:052b}"


def float_to_bits(value: float) -> str:
    """Return the 32 single-precision bits of ``value`` after rounding it."""
    sign, exponent, fraction = _encode(_to_single(float(value)), 8, 23)
    return f"{sign}{exponent:08b}{fraction:023b}"


def _decode_single(bits: str) -> float:
    """Decode 32 bits, reading an all-zero exponent without the implicit one."""
    bits = _check_bits(bits, 32)
    field = int(bits[1:9], 2)
    mantissa = (0 if field == 0 else 1) + int(bits[9:], 2) / (1 << 23)
    value = _to_single(math.ldexp(mantissa, field - 127))
    return -value if bits[0] == "1" else value


def multiply_float_bits(a: str, b: str) -> str:
    """Multiply two single-precision numbers given as bits; return the product's bits."""
    product = _to_single(_decode_single(a) * _decode_single(b))
    return float_to_bits(product)


def estimate_pi(precision: float, rng: Optional[random.Random] = None) -> float:
    """Estimate pi by sampling the unit square until within ``precision`` of it."""
    if not precision > 0:
        raise ValueError("precision must be positive")
    if rng is None:
        rng = random.Random()
    inside = total = 0
    estimate = 0.0
    error = math.inf
    while precision < abs(error):
        x = rng.random()
        y = rng.random()
        if math.hypot(x, y) < 1.0:
            inside += 1
        total += 1
        estimate = 4.0 * inside / total
        error = estimate - math.pi
    return estimate


def _run_convert(text: str) -> str:
    tokens = text.split()
    if len(tokens) < 4:
        raise ValueError("expected digit count, source base, destination base and number")
    digit_count, source_base, dest_base = (int(token) for token in tokens[:3])
    return convert(tokens[3][:digit_count], source_base, dest_base)


def _run_subtract(text: str) -> str:
    rest = "".join(text[8:].split())
    return subtract_bytes(text[:8], rest[:8])


def _run_bin_to_float(text: str) -> str:
    return f"{bits_to_float(text[:32]):f}\n"


def _run_double_to_bin(text: str) -> str:
    tokens = text.split()
    if not tokens:
        raise ValueError("expected a number")
    return double_to_bits(float(tokens[0]))


def _run_float_mul(text: str) -> str:
    return multiply_float_bits(text[:32], text[33:65])


def _run_pi(text: str) -> str:
    tokens = text.split()
    if not tokens:
        raise ValueError("expected a precision")
    return f"{estimate_pi(float(tokens[0])):.12f}\n"


_COMMANDS: Dict[str, Tuple[Callable[[str], str], str]] = {
    "convert": (_run_convert, "convert a number between bases"),
    "subtract": (_run_subtract, "subtract two 8-bit numbers"),
    "bin-to-float": (_run_bin_to_float, "decode single-precision bits"),
    "double-to-bin": (_run_double_to_bin, "show the bits of a double"),
    "float-mul": (_run_float_mul, "multiply two single-precision bit strings"),
    "pi": (_run_pi, "estimate pi to a given precision"),
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one of the number-representation exercises on an input file."""
    parser = argparse.ArgumentParser(
        prog="archlab-numrep",
        description="Number representation exercises.",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    for name, (_, text) in _COMMANDS.items():
        sub = commands.add_parser(name, help=text)
        sub.add_argument("input", help="path to the input file")
    args = parser.parse_args(argv)

    try:
        with open(args.input, "r", encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        print(f"fopen failed: {exc.strerror}", file=sys.stderr)
        return 1

    handler = _COMMANDS[args.command][0]
    try:
        output = handler(text)
    except ValueError as exc:
        print(f"invalid input: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0
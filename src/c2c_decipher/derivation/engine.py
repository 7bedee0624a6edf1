"""Rule-based unlock code derivation.

The code is four segments concatenated and uppercased:

    AA  two characters of the device model, picked by the parity of the
        first digit in the serial number ("??" if the serial has no digit)
    BB  fabrication day if latency < 50 ms, else fabrication month
        ("00" if latency does not parse)
    CC  sum of the digits in the device IP, zero-padded to width 2
    DD  vowel and consonant counts of the device name, larger count first
"""

from __future__ import annotations

import logging

from c2c_decipher.config.settings import (
    LATENCY_THRESHOLD_MS,
    NO_DIGIT_SEGMENT,
    UNPARSABLE_LATENCY_SEGMENT,
)
from c2c_decipher.derivation.models import DerivedCode, DeviceDescriptor, SegmentBreakdown
from c2c_decipher.derivation.validator import DescriptorValidator

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
VOWELS = "aeiou"
CONSONANTS = "bcdfghjklmnpqrstvwxyz"


def is_digit(ch: str) -> bool:
    return ch in DIGITS


def is_vowel(ch: str) -> bool:
    return ch.isascii() and ch.lower() in VOWELS


def is_consonant(ch: str) -> bool:
    return ch.isascii() and ch.lower() in CONSONANTS


def first_digit(text: str) -> int | None:
    for ch in text:
        if is_digit(ch):
            return DIGITS.index(ch)
    return None


def parse_leading_int(text: str) -> int | None:
    """Parse an optionally signed integer prefix, ignoring trailing characters.

    Leading whitespace is skipped. Returns None when no digits follow.
    """
    s = text.lstrip()
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    value = None
    for ch in s:
        if not is_digit(ch):
            break
        value = (value or 0) * 10 + DIGITS.index(ch)
    return None if value is None else sign * value


def digit_sum(text: str) -> int:
    return sum(DIGITS.index(ch) for ch in text if is_digit(ch))


def count_letters(text: str) -> tuple[int, int]:
    """Return (vowels, consonants) over ASCII letters, case-insensitive."""
    vowels = sum(1 for ch in text if is_vowel(ch))
    consonants = sum(1 for ch in text if is_consonant(ch))
    return vowels, consonants


class CodeDerivationEngine:
    """Maps a device descriptor to its unlock code. Stateless."""

    def __init__(self, validator: DescriptorValidator | None = None) -> None:
        self._validator = validator or DescriptorValidator()

    def derive(self, descriptor: DeviceDescriptor) -> DerivedCode:
        """Derive the code. Never raises: failures come back as an error result."""
        missing = self._validator.missing_fields(descriptor)
        if missing:
            return DerivedCode.pending(tuple(missing))

        bad_types = self._validator.non_text_fields(descriptor)
        if bad_types:
            return DerivedCode.error(f"Non-text fields: {', '.join(bad_types)}")

        try:
            breakdown = self.explain(descriptor)
        except Exception as e:
            logger.debug("Derivation failed for %s: %s", descriptor, e)
            return DerivedCode.error(str(e) or type(e).__name__)

        parts = breakdown.segments
        segments = (parts["AA"], parts["BB"], parts["CC"], parts["DD"])
        code = "".join(segments).upper()
        logger.debug("Derived %s from segments %s", code, segments)
        return DerivedCode.ok(code, segments)

    def explain(self, descriptor: DeviceDescriptor) -> SegmentBreakdown:
        """Compute every segment with its intermediate values.

        Expects a complete descriptor and may raise on malformed input; use
        ``derive`` for the total version.
        """
        b = SegmentBreakdown()

        b.first_digit = first_digit(descriptor.serial_number)
        b.model_key = descriptor.device_model.replace("-", "")
        if b.first_digit is None:
            aa = NO_DIGIT_SEGMENT
        elif b.first_digit % 2 == 0:
            aa = b.model_key[:2]
        else:
            aa = b.model_key[-2:]

        b.latency_ms = parse_leading_int(descriptor.latency)
        if b.latency_ms is None:
            bb = UNPARSABLE_LATENCY_SEGMENT
        elif b.latency_ms < LATENCY_THRESHOLD_MS:
            bb = descriptor.fab_day
        else:
            bb = descriptor.fab_month

        b.ip_digit_sum = digit_sum(descriptor.device_ip)
        cc = str(b.ip_digit_sum).zfill(2)

        b.vowels, b.consonants = count_letters(descriptor.device_name)
        if b.vowels > b.consonants:
            dd = f"{b.vowels}{b.consonants}"
        else:
            dd = f"{b.consonants}{b.vowels}"

        b.segments = {"AA": aa, "BB": bb, "CC": cc, "DD": dd}
        return b


_default_engine = CodeDerivationEngine()


def derive(descriptor: DeviceDescriptor) -> DerivedCode:
    """Derive with a shared default engine."""
    return _default_engine.derive(descriptor)

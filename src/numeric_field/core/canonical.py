# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Conversions between display text, canonical numerals and committed values.

A canonical numeral is the display text without group separators. It is kept
verbatim while editing (`"-"`, `"0."`, `"2.100"` or `"002"` are all fine) and
only normalized when the value is handed to the owner of the field.
"""

import re
from decimal import Decimal
from numbers import Number

from .config import Limit

GROUP_WIDTH = 3

# at least one digit, optional sign, at most one dot
NUMERAL = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")
DECIMAL_DIGITS = re.compile(r"[0-9]+")


def strip(text: str, separator: str = ",") -> str:
    return text.replace(separator, "")


def split(canonical: str) -> (str, str, str | None):
    """Splits into sign, integer segment and decimal segment (`None` without a dot)."""
    sign = "-" if canonical.startswith("-") else ""
    integer, dot, decimal = canonical[len(sign):].partition(".")
    return (sign, integer, decimal if dot else None)


def truncate_decimals(canonical: str, limit: Limit | None = None) -> str:
    if not limit or limit.decimal is None:
        return canonical
    integer, _, decimal = canonical.partition(".")
    if len(decimal) <= limit.decimal:
        return canonical
    if limit.decimal == 0:
        return integer
    return f"{integer}.{decimal[:limit.decimal]}"


def is_valid_number(text: str) -> bool:
    return NUMERAL.fullmatch(text) is not None


def count_separators(text: str, separator: str = ",") -> int:
    return text.count(separator)


def group(digits: str, separator: str = ",") -> str:
    head = len(digits) % GROUP_WIDTH or GROUP_WIDTH
    groups = [digits[:head]]
    groups += [digits[idx:idx + GROUP_WIDTH] for idx in range(head, len(digits), GROUP_WIDTH)]
    return separator.join(groups)


def format_canonical(canonical: str | None, separator: str = ",") -> str:
    if canonical is None:
        return ""
    sign, integer, decimal = split(canonical)
    text = sign + group(integer, separator)
    if decimal is not None:
        text += "." + decimal
    return text


def render(canonical: str | None, config) -> str:
    """Display text of `canonical` under the decimal limit and separator of `config`."""
    if canonical is None:
        return ""
    return format_canonical(truncate_decimals(canonical, config.limit), config.separator)


def normalize(canonical: str, precise: bool = False) -> int | float | str:
    """Collapses redundant leading zeros: `"002"` -> `2`, `"-003"` -> `-3`, `"2.10"` -> `2.1`.

    Trailing decimal zeros survive in precise mode, where the value is returned
    as an exact numeral string.
    """
    sign, integer, decimal = split(canonical)
    integer = integer.lstrip("0") or "0"
    if not decimal:
        numeral = sign + integer
        return numeral if precise else int(numeral)
    numeral = f"{sign}{integer}.{decimal}"
    return numeral if precise else float(numeral)


def to_canonical(value) -> str | None:
    """Canonical numeral of an externally supplied value."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric value: `{value!r}`")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        exact = Decimal(repr(value)) if isinstance(value, float) else value
        if not exact.is_finite():
            raise ValueError(f"Not a finite value: `{value!r}`")
        numeral = format(exact, "f")
        # floats carry no meaningful trailing zeros, `2.0` is displayed as `2`
        if "." in numeral and isinstance(value, float):
            numeral = numeral.rstrip("0").rstrip(".")
        return numeral
    if isinstance(value, Number):
        return to_canonical(float(value))
    if isinstance(value, str):
        numeral = value.strip()
        if numeral == "" or not is_valid_number(numeral):
            raise ValueError(f"Not a numeric value: `{value!r}`")
        return numeral
    raise ValueError(f"Not a numeric value: `{value!r}`")

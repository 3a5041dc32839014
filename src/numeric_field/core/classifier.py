# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Classification of uncontrolled edits of a formatted number field.

The host only reports the text before and after a keystroke, so the same diff
can mean a typed digit, an auto-inserted separator, a moved decimal point and
so on. `RULES` lists one predicate/transform pair per interpretation, the first
rule whose predicate holds decides the `Outcome`.
"""

from dataclasses import dataclass
from decimal import Decimal
from functools import cached_property
from typing import Callable

from .canonical import (
    DECIMAL_DIGITS,
    count_separators,
    format_canonical,
    is_valid_number,
    normalize,
    split,
    strip,
    truncate_decimals,
)
from .config import FieldConfig


class _Unset:
    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


# a text-only change, the owner is not notified
UNSET = _Unset()


@dataclass(frozen=True)
class Accept:
    text: str
    caret: int
    value: object = UNSET


@dataclass(frozen=True)
class Reject:
    caret: int


@dataclass(frozen=True)
class Violation:
    kind: str
    bound: object
    actual: object


Outcome = Accept | Reject | Violation

MAX = "max"
MIN = "min"
LIMIT_INTEGER = "limit.integer"
LIMIT_DECIMAL = "limit.decimal"


@dataclass(frozen=True)
class Edit:
    prev: str
    prev_caret: int
    next: str
    next_caret: int
    config: FieldConfig

    @property
    def separator(self) -> str:
        return self.config.separator

    @cached_property
    def canonical(self) -> str:
        return strip(self.next, self.separator)

    @property
    def grown_by(self) -> int:
        return len(self.next) - len(self.prev)

    @property
    def separators_added(self) -> int:
        return count_separators(self.next, self.separator) - count_separators(self.prev, self.separator)

    @property
    def inserted(self) -> str:
        """The character left of the host caret."""
        if 0 < self.next_caret <= len(self.next):
            return self.next[self.next_caret - 1]
        return ""

    def value_of(self, canonical: str):
        return normalize(canonical, self.config.precise)

    def accept(self, text: str, caret: int, value=UNSET) -> Accept:
        return Accept(text, max(0, min(caret, len(text))), value)

    def accept_canonical(self, canonical: str, caret: Callable[[str], int]) -> Accept:
        """Reformats and commits `canonical`, `caret` maps the new text to a caret."""
        canonical = truncate_decimals(canonical, self.config.limit)
        text = format_canonical(canonical, self.separator)
        return self.accept(text, caret(text), self.value_of(canonical))

    def reject(self) -> Reject:
        return Reject(max(0, min(self.prev_caret, len(self.prev))))

    def separators_dropped_by(self, text: str) -> bool:
        return count_separators(self.prev, self.separator) > count_separators(text, self.separator)


@dataclass(frozen=True)
class Rule:
    name: str
    applies: Callable[[Edit], bool]
    apply: Callable[[Edit], Outcome]

    def __repr__(self):
        return f"Rule({self.name})"


RULES: list[Rule] = []


def rule(name: str, applies: Callable[[Edit], bool]):
    def register(fn):
        RULES.append(Rule(name, applies, fn))
        return fn
    return register


@rule("cleared", lambda edit: not edit.next)
def cleared(edit: Edit) -> Outcome:
    return Accept("", 0, None)


# digit limits and bounds


def _integer_digits(edit: Edit) -> int:
    return len(split(edit.canonical)[1])


def _decimal_digits(edit: Edit) -> int:
    # a second dot is a relocation in progress, only the first segment counts
    segments = edit.canonical.split(".")
    return len(segments[1]) if len(segments) > 1 else 0


def _bounded(edit: Edit) -> bool:
    return is_valid_number(edit.canonical)


@rule(LIMIT_INTEGER, lambda edit: (edit.config.limit is not None
                                   and edit.config.limit.integer is not None
                                   and _integer_digits(edit) > edit.config.limit.integer))
def too_many_integer_digits(edit: Edit) -> Outcome:
    return Violation(LIMIT_INTEGER, edit.config.limit.integer, _integer_digits(edit))


@rule(LIMIT_DECIMAL, lambda edit: (edit.config.limit is not None
                                   and edit.config.limit.decimal is not None
                                   and _decimal_digits(edit) > edit.config.limit.decimal))
def too_many_decimal_digits(edit: Edit) -> Outcome:
    return Violation(LIMIT_DECIMAL, edit.config.limit.decimal, _decimal_digits(edit))


@rule(MAX, lambda edit: (edit.config.upper is not None
                         and _bounded(edit)
                         and Decimal(edit.canonical) > edit.config.upper))
def above_max(edit: Edit) -> Outcome:
    return Violation(MAX, edit.config.max, edit.value_of(edit.canonical))


@rule(MIN, lambda edit: (edit.config.lower is not None
                         and _bounded(edit)
                         and Decimal(edit.canonical) < edit.config.lower))
def below_min(edit: Edit) -> Outcome:
    return Violation(MIN, edit.config.min, edit.value_of(edit.canonical))


# partial numerals that are kept while typing


@rule("lone sign", lambda edit: edit.next == "-")
def lone_sign(edit: Edit) -> Outcome:
    return Accept("-", 1)


@rule("lone dot", lambda edit: edit.next == ".")
def lone_dot(edit: Edit) -> Outcome:
    return Accept("0.", 2, edit.value_of("0"))


@rule("signed dot", lambda edit: edit.next == "-.")
def signed_dot(edit: Edit) -> Outcome:
    return Accept("-0.", 3, edit.value_of("0"))


@rule("zero dot", lambda edit: edit.next == "0.")
def zero_dot(edit: Edit) -> Outcome:
    return Accept("0.", 2, edit.value_of("0"))


@rule("dot appended", lambda edit: edit.next == edit.prev + "." and "." not in edit.prev)
def dot_appended(edit: Edit) -> Outcome:
    return edit.accept(edit.next, len(edit.next))


@rule("trailing dot removed", lambda edit: edit.prev == edit.next + ".")
def trailing_dot_removed(edit: Edit) -> Outcome:
    return edit.accept(edit.next, len(edit.next))


# moving and deleting the decimal point


def _relocated(edit: Edit) -> str:
    before = edit.next[:edit.next_caret].replace(".", "")
    after = edit.next[edit.next_caret:].replace(".", "")
    numeral = f"{before}.{after}"
    if numeral.startswith("-."):
        numeral = "-0." + numeral[2:]
    return strip(numeral, edit.separator)


def _is_relocation(edit: Edit) -> bool:
    if not (edit.grown_by == 1
            and edit.inserted == "."
            and edit.prev.replace(".", "") == edit.next.replace(".", "")):
        return False
    return ".." in edit.next or is_valid_number(_relocated(edit))


@rule("dot relocated", _is_relocation)
def dot_relocated(edit: Edit) -> Outcome:
    if ".." in edit.next:
        return edit.accept(edit.prev, edit.prev.find(".") + 1)

    def after_dot(text):
        return text.find(".") + 1 if "." in text else len(text)
    return edit.accept_canonical(_relocated(edit), after_dot)


@rule("dot deleted", lambda edit: (edit.grown_by == -1
                                   and "." in edit.prev
                                   and "." not in edit.next
                                   and edit.prev.replace(".", "") == edit.next
                                   and is_valid_number(edit.canonical)))
def dot_deleted(edit: Edit) -> Outcome:
    _, integer, decimal = split(strip(edit.prev, edit.separator))
    # merging the decimal digits shifts the integer grouping by one separator
    shifted = len(decimal) % 3 != 0 and integer and len(integer) % 3 == 0
    caret = edit.next_caret + 1 if shifted else edit.next_caret
    return edit.accept_canonical(edit.canonical, lambda _: caret)


# cosmetic edits of the decimal segment


@rule("trailing zero", lambda edit: ("." in edit.next
                                     and edit.next.endswith("0")
                                     and (edit.next == edit.prev + "0" or edit.prev == edit.next + "0")))
def trailing_zero(edit: Edit) -> Outcome:
    return edit.accept(edit.next, edit.next_caret)


@rule("truncated to dot", lambda edit: edit.next.endswith(".") and edit.prev.startswith(edit.next))
def truncated_to_dot(edit: Edit) -> Outcome:
    return edit.accept(edit.next, edit.next_caret)


@rule("decimal digit edited", lambda edit: ("." in edit.next
                                            and "." in edit.prev
                                            and edit.prev.partition(".")[0] == edit.next.partition(".")[0]))
def decimal_digit_edited(edit: Edit) -> Outcome:
    decimal = edit.next.partition(".")[2]
    if not DECIMAL_DIGITS.fullmatch(decimal):
        return edit.reject()
    return edit.accept(edit.next, edit.next_caret, edit.value_of(edit.canonical))


# group separators


@rule("separator inserted", lambda edit: (edit.grown_by == 1
                                          and edit.separators_added == 1
                                          and strip(edit.prev, edit.separator) == edit.canonical))
def separator_inserted(edit: Edit) -> Outcome:
    return edit.accept(edit.prev, edit.next_caret - 1)


def _without_digit(edit: Edit) -> str:
    """Canonical of the previous text without the digit left of the removed separator."""
    change_at = edit.next_caret - 1
    return strip(edit.prev[:change_at] + edit.prev[change_at + 1:], edit.separator)


@rule("separator deleted", lambda edit: (edit.grown_by == -1
                                         and edit.separators_added == -1
                                         and strip(edit.prev, edit.separator) == edit.canonical
                                         and edit.next_caret >= 1
                                         and is_valid_number(_without_digit(edit))))
def separator_deleted(edit: Edit) -> Outcome:
    change_at = edit.next_caret - 1

    def caret(text):
        return change_at - 1 if edit.separators_dropped_by(text) else change_at
    return edit.accept_canonical(_without_digit(edit), caret)


@rule("integer deleted", lambda edit: (edit.next.startswith(".")
                                       and edit.prev.find(".") > 0
                                       and is_valid_number(strip("0" + edit.next, edit.separator))))
def integer_deleted(edit: Edit) -> Outcome:
    text = "0" + edit.next
    return edit.accept(text, 1, edit.value_of(strip(text, edit.separator)))


# everything else is typed or deleted digits


@rule("not a number", lambda edit: not is_valid_number(edit.canonical))
def not_a_number(edit: Edit) -> Outcome:
    return edit.reject()


@rule("regrouped", lambda edit: True)
def regrouped(edit: Edit) -> Outcome:
    def caret(text):
        if edit.next_caret == 0:
            return 0
        if edit.separators_dropped_by(text):
            return edit.next_caret - 1
        if count_separators(text, edit.separator) > count_separators(edit.prev, edit.separator):
            return edit.next_caret + 1
        return edit.next_caret
    return edit.accept_canonical(edit.canonical, caret)


def resolve(edit: Edit) -> (Rule, Outcome):
    for candidate in RULES:
        if candidate.applies(edit):
            return (candidate, candidate.apply(edit))
    raise LookupError(f"No rule matches {edit!r}")


def classify(prev_text: str, prev_caret: int, next_text: str | None, next_caret: int,
             config: FieldConfig = None) -> Outcome:
    """Decides the outcome of changing `prev_text` into `next_text`."""
    edit = Edit(prev_text, prev_caret, next_text or "", next_caret, config or FieldConfig())
    return resolve(edit)[1]


# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

import os
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Self

import platformdirs
import json_store


class ConfigError(ValueError):
    pass


def static(fn):
    return fn()


def ensure_key(store, key, default):
    if key in store:
        actual = store[key]
        if type(actual) is dict and type(default) is dict:
            ensure_keys(actual, key_def_pairings=default)
            store[key] = actual
    else:
        store[key] = default


def ensure_keys(store, key_def_pairings={}):
    for k, v in key_def_pairings.items():
        ensure_key(store, k, v)


DEFAULTS = {
    "field": {
        "separator": ",",
        "limit": None,
        "max": None,
        "min": None,
        "precise": False,
    }
}


@static
def CONFIG():
    class ConfigStore:
        def __init__(self):
            self.dpath_data = Path(platformdirs.user_data_dir("numeric_field", "numeric_field"))

        @property
        def dpath_data(self):
            return self._dpath_data

        @dpath_data.setter
        def dpath_data(self, value):
            self._dpath_data = Path(value)
            os.makedirs(self.dpath_data, exist_ok=True)
            self.fpath_config = self.dpath_data / ".config.json"

        @property
        def fpath_config(self):
            return self._fpath_config

        @fpath_config.setter
        def fpath_config(self, value):
            self._fpath_config = Path(value)
            self.store = json_store.open(self.fpath_config, json_kw={ "indent": 4 })
            ensure_keys(self.store, DEFAULTS)

    return ConfigStore()


def _parse_digits(part: str, which: str, source: str) -> int | None:
    if part == "":
        return None
    if not part.isascii() or not part.isdigit():
        raise ConfigError(f"Invalid {which} digit limit in `{source}`")
    return int(part)


@dataclass(frozen=True)
class Limit:
    """Maximum digit counts of the integer and decimal segment, `None` is unlimited."""
    integer: int | None = None
    decimal: int | None = None

    @classmethod
    def parse(cls, text: str | None) -> Self | None:
        """Parses `"intDigits.decDigits"`, e.g. `"10.2"`, `".2"` or `"10"`."""
        if text is None:
            return None
        text = str(text).strip()
        if not text:
            return None
        int_part, _, deci_part = text.partition(".")
        return cls(_parse_digits(int_part, "integer", text),
                   _parse_digits(deci_part, "decimal", text))

    def __bool__(self) -> bool:
        return self.integer is not None or self.decimal is not None

    def __str__(self):
        int_part = "" if self.integer is None else str(self.integer)
        deci_part = "" if self.decimal is None else str(self.decimal)
        return f"{int_part}.{deci_part}"


def _as_bound(value, name):
    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ConfigError(f"`{name}` must be a number")
    try:
        return Decimal(str(value))
    except ArithmeticError:
        raise ConfigError(f"`{name}` must be a number, got `{value}`") from None


@dataclass(frozen=True)
class FieldConfig:
    separator: str = ","
    limit: Limit | str | None = None
    max: int | float | str | None = None
    min: int | float | str | None = None
    precise: bool = False
    # bounds as exact decimals, derived from `max`/`min`
    _max: Decimal | None = field(default=None, init=False, repr=False, compare=False)
    _min: Decimal | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.separator, str) or len(self.separator) != 1:
            raise ConfigError(f"The separator must be a single character, got `{self.separator!r}`")
        if self.separator.isdigit() or self.separator in ".-":
            raise ConfigError(f"`{self.separator}` can't be used as a separator")

        limit = self.limit
        if not isinstance(limit, Limit):
            limit = Limit.parse(limit)
        object.__setattr__(self, "limit", limit or None)

        upper = _as_bound(self.max, "max")
        lower = _as_bound(self.min, "min")
        if upper is not None and lower is not None and lower > upper:
            raise ConfigError(f"`min` ({self.min}) is greater than `max` ({self.max})")
        object.__setattr__(self, "_max", upper)
        object.__setattr__(self, "_min", lower)

    @property
    def upper(self) -> Decimal | None:
        return self._max

    @property
    def lower(self) -> Decimal | None:
        return self._min

    @classmethod
    def from_store(cls, store, **overrides) -> Self:
        """Builds a config from the persisted `field` defaults, non-`None` overrides win."""
        settings = dict(DEFAULTS["field"])
        settings.update({k: v for k, v in store.items() if k in settings})
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**settings)

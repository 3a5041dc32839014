# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

from .config import CONFIG, ConfigError, FieldConfig, Limit, ensure_keys
from .canonical import (
    strip,
    truncate_decimals,
    is_valid_number,
    format_canonical,
    render,
    normalize,
    to_canonical,
    count_separators,
)
from .classifier import (
    UNSET,
    Accept,
    Reject,
    Violation,
    Outcome,
    Edit,
    Rule,
    RULES,
    MAX,
    MIN,
    LIMIT_INTEGER,
    LIMIT_DECIMAL,
    classify,
)
from .controller import FieldController

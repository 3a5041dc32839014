# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

from . import Host

from numeric_field.core import Accept, Reject, Violation, FieldConfig, FieldController


def make(value=None, caret=0, schedule=None, **config):
    host = Host(caret)
    controller = FieldController(value, FieldConfig(**config), schedule=schedule, **host.callbacks())
    return (host, controller)


def type_keys(host, controller, keys):
    """Replays keystrokes the way a text widget would report them."""
    for key in keys:
        text, caret = controller.display_text, controller.caret
        if key == "backspace":
            text, caret = text[:caret - 1] + text[caret:], caret - 1
        else:
            text, caret = text[:caret] + key + text[caret:], caret + 1
        host.caret = caret
        controller.submit_edit(text)
        controller.flush_caret()


def test_initial_state():
    host, controller = make(1234567.111, caret=99)
    assert controller.display_text == "1,234,567.111"
    assert controller.value == 1234567.111
    assert controller.caret == len("1,234,567.111")

    host, controller = make()
    assert controller.display_text == ""
    assert controller.value is None


def test_type_first_digit():
    host, controller = make()
    host.caret = 1
    assert controller.submit_edit("1") == Accept("1", 1, 1)
    assert controller.display_text == "1"
    assert host.values == [1]
    # the caret is written in a second phase
    assert host.carets == []
    controller.flush_caret()
    assert host.carets == [1]


def test_type_digits():
    host, controller = make()
    type_keys(host, controller, "122345")
    assert controller.display_text == "122,345"
    assert controller.value == 122345
    assert host.values == [1, 12, 122, 1223, 12234, 122345]
    assert host.caret == 7


def test_type_decimal():
    host, controller = make()
    type_keys(host, controller, "1234567.111")
    assert controller.display_text == "1,234,567.111"
    assert host.values[-1] == 1234567.111
    assert host.caret == len("1,234,567.111")


def test_type_dot_alone():
    host, controller = make()
    type_keys(host, controller, ".")
    assert controller.display_text == "0."
    assert host.values == [0]
    assert host.caret == 2


def test_resubmit_is_noop():
    host, controller = make()
    type_keys(host, controller, "1234")
    host.caret = 1
    values, caret = host.values[:], controller.caret
    assert controller.submit_edit("1,234") is None
    assert host.values == values
    assert controller.caret == caret


def test_commit_dedups_values():
    host, controller = make(5, caret=1)
    type_keys(host, controller, ["backspace", "5"])
    assert host.values == [None, 5]
    host.caret = 2
    controller.submit_edit("05")
    assert controller.display_text == "05"
    assert host.values == [None, 5]


def test_integer_limit_violation():
    host, controller = make(1234567890, caret=13, limit="10.2")
    assert controller.display_text == "1,234,567,890"
    host.caret = 14
    outcome = controller.submit_edit("1,234,567,8901")
    assert outcome == Violation("limit.integer", 10, 11)
    assert host.violations == [Violation("limit.integer", 10, 11)]
    assert controller.display_text == "1,234,567,890"
    assert controller.value == 1234567890
    assert host.values == []
    controller.flush_caret()
    assert host.caret == 13


def test_decimal_limit_violation():
    host, controller = make(limit=".2")
    type_keys(host, controller, "1.234")
    assert controller.display_text == "1.23"
    assert host.violations == [Violation("limit.decimal", 2, 3)]
    assert host.values == [1, 1.2, 1.23]


def test_max_violation():
    host, controller = make(max=100)
    type_keys(host, controller, "1000")
    assert controller.display_text == "100"
    assert [v.kind for v in host.violations] == ["max"]
    assert host.violations[0].actual == 1000


def test_trailing_zeros_are_cosmetic():
    host, controller = make(2.1, caret=3)
    type_keys(host, controller, "00")
    assert controller.display_text == "2.100"
    type_keys(host, controller, ["backspace"])
    assert controller.display_text == "2.10"
    type_keys(host, controller, ["backspace"])
    assert controller.display_text == "2.1"
    assert host.values == []


def test_reject_restores_caret():
    host, controller = make()
    type_keys(host, controller, "12")
    outcome = controller.submit_edit("1x2", 2)
    assert outcome == Reject(2)
    assert controller.display_text == "12"
    controller.flush_caret()
    assert host.caret == 2
    assert host.values == [1, 12]
    assert host.violations == []


def test_decimal_relocation():
    host, controller = make(123.45, caret=5)
    host.caret = 6
    controller.submit_edit("123.4.5")
    controller.flush_caret()
    assert controller.display_text == "1,234.5"
    assert host.values == [1234.5]
    assert host.caret == 6


def test_separator_insertion_keeps_value():
    host, controller = make(1234, caret=1)
    host.caret = 2
    controller.submit_edit("1,,234")
    controller.flush_caret()
    assert controller.display_text == "1,234"
    assert host.values == []
    assert host.caret == 1


def test_lone_sign_keeps_stale_value():
    host, controller = make(5, caret=1)
    type_keys(host, controller, ["backspace", "-"])
    assert controller.display_text == "-"
    assert host.values == [None]
    type_keys(host, controller, "5")
    assert controller.display_text == "-5"
    assert host.values == [None, -5]


def test_precise_mode():
    host, controller = make(precise=True)
    type_keys(host, controller, "0.10")
    assert controller.display_text == "0.10"
    assert host.values == ["0", "0.1"]
    type_keys(host, controller, "02")
    assert host.values == ["0", "0.1", "0.1002"]


def test_report_caret():
    host, controller = make(1234)
    host.caret = 1
    controller.report_caret()
    assert controller.caret == 1
    controller.report_caret(99)
    assert controller.caret == len("1,234")
    assert host.carets == []


def test_scheduled_caret_waits_for_text():
    scheduled = []
    host, controller = make(schedule=scheduled.append)
    host.caret = 4
    controller.submit_edit("1234")
    assert controller.display_text == "1,234"
    assert host.carets == []
    seen = []
    for callback in scheduled:
        seen.append(controller.display_text)
        callback()
    assert seen == ["1,234"]
    assert host.carets == [5]
    assert controller.pending_caret == []


def test_reconcile():
    host, controller = make(5, caret=1)
    assert controller.reconcile(1234.5)
    assert controller.display_text == "1,234.5"
    assert controller.value == 1234.5
    controller.flush_caret()
    assert host.caret == len("1,234.5")
    # the owner already knows its own value
    assert host.values == []
    assert not controller.reconcile(1234.5)

    assert controller.reconcile(None)
    assert controller.display_text == ""


def test_reconcile_skips_limits():
    host, controller = make(limit="2.", max=10)
    assert controller.reconcile(12345)
    assert controller.display_text == "12,345"
    assert host.violations == []


def test_reconcile_then_edit():
    host, controller = make()
    controller.reconcile(99)
    controller.flush_caret()
    type_keys(host, controller, "9")
    assert controller.display_text == "999"
    assert host.values == [999]

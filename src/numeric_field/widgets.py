# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

from .core import FieldConfig, FieldController, Violation, render, to_canonical

from textual.message import Message
from textual.widgets import Input


class NumericInput(Input):
    """An `Input` that keeps its text formatted as a grouped number.

    Every raw change of the text is routed through a `FieldController`. The
    widget posts `NumericInput.ValueChanged` when the committed number changes
    and `NumericInput.LimitExceeded` when an edit breaks a configured limit.
    """

    DEFAULT_CSS = """
    NumericInput {
        width: 40;
    }
    """

    class ValueChanged(Message):
        def __init__(self, numeric_input: "NumericInput", value) -> None:
            self.numeric_input = numeric_input
            self.value = value
            super().__init__()

        @property
        def control(self) -> "NumericInput":
            return self.numeric_input

    class LimitExceeded(Message):
        def __init__(self, numeric_input: "NumericInput", violation: Violation) -> None:
            self.numeric_input = numeric_input
            self.violation = violation
            super().__init__()

        @property
        def control(self) -> "NumericInput":
            return self.numeric_input

    def __init__(self, number=None, config: FieldConfig = None, **kwargs):
        self.field_config = config or FieldConfig()
        self._pending_carets = 0
        # selecting everything on focus would turn the first key into a selection edit
        kwargs.setdefault("select_on_focus", False)
        super().__init__(render(to_canonical(number), self.field_config), **kwargs)
        self.controller = FieldController(number,
                                          self.field_config,
                                          get_caret=self._get_caret,
                                          set_caret=self._set_caret,
                                          on_value_changed=self._value_changed,
                                          on_limit_exceeded=self._limit_exceeded,
                                          schedule=self._schedule_caret)

    @property
    def number(self):
        """The last committed value, assigning replaces the text."""
        return self.controller.value

    @number.setter
    def number(self, value):
        if self.controller.reconcile(value):
            self._show(self.controller.display_text)

    def _get_caret(self) -> int:
        return self.cursor_position

    def _set_caret(self, caret: int):
        self.cursor_position = max(0, min(caret, len(self.value)))

    def _schedule_caret(self, callback):
        # the caret is written after the new text was rendered
        if self.is_mounted:
            self._pending_carets += 1
            self.call_after_refresh(self._write_caret, callback)
        else:
            callback()

    def _write_caret(self, callback):
        self._pending_carets -= 1
        callback()

    def _value_changed(self, value):
        self.post_message(self.ValueChanged(self, value))

    def _limit_exceeded(self, violation: Violation):
        self.post_message(self.LimitExceeded(self, violation))

    def _show(self, text: str):
        if self.value != text:
            with self.prevent(Input.Changed):
                self.value = text

    def on_input_changed(self, event: Input.Changed) -> None:
        # raw text changes are replaced by `ValueChanged`
        event.stop()
        if self.value == self.controller.display_text:
            return
        self.controller.submit_edit(self.value, self.cursor_position)
        self._show(self.controller.display_text)

    def on_mount(self) -> None:
        self.watch(self, "selection", self._selection_moved, init=False)
        self.controller.report_caret(self.cursor_position)

    def _selection_moved(self, selection) -> None:
        # only moves of the host itself are relayed: not while an edit is still
        # unclassified and not while a caret write of the controller is queued
        if self._pending_carets or self.value != self.controller.display_text:
            return
        self.controller.report_caret(selection.end)

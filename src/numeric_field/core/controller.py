# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

from typing import Callable

from textual import log

from .canonical import render, to_canonical
from .classifier import UNSET, Accept, Reject, Violation, Edit, Outcome, resolve
from .config import FieldConfig


class FieldController:
    """Owns the display text, the caret and the last committed value of one field.

    The host relays raw text changes through `submit_edit` and caret moves it
    caused itself through `report_caret`. Caret corrections are written back in
    a second phase: `schedule` is handed a callback that has to run once the new
    text is visible in the host. Without a scheduler the corrections queue up
    until `flush_caret` is called.
    """

    def __init__(self,
                 value=None,
                 config: FieldConfig = None,
                 *,
                 get_caret: Callable[[], int],
                 set_caret: Callable[[int], None],
                 on_value_changed: Callable[[object], None] = None,
                 on_limit_exceeded: Callable[[Violation], None] = None,
                 schedule: Callable[[Callable[[], None]], None] = None):
        self.config = config or FieldConfig()
        self.get_caret = get_caret
        self.set_caret = set_caret
        self.on_value_changed = on_value_changed
        self.on_limit_exceeded = on_limit_exceeded
        self.schedule = schedule
        self.pending_caret = []

        self.display_text = render(to_canonical(value), self.config)
        self.last_committed = value
        self.caret = max(0, min(get_caret(), len(self.display_text)))

    @property
    def value(self):
        return self.last_committed

    def submit_edit(self, next_text: str | None, host_caret: int = None) -> Outcome | None:
        """Classifies the host's raw text and applies the outcome.

        Returns `None` when `next_text` is the current display text.
        """
        next_text = next_text or ""
        if next_text == self.display_text:
            return None
        if host_caret is None:
            host_caret = self.get_caret()

        edit = Edit(self.display_text, self.caret, next_text, host_caret, self.config)
        matched, outcome = resolve(edit)
        log(f"{self.display_text!r} -> {next_text!r}: {matched.name}")

        match outcome:
            case Accept(text=text, caret=caret, value=value):
                self.display_text = text
                self.move_caret(caret)
                if value is not UNSET:
                    self.commit(value)
            case Reject(caret=caret):
                self.move_caret(caret)
            case Violation(kind=kind, bound=bound, actual=actual):
                log(f"limit exceeded: {kind} (bound {bound}, got {actual!r})")
                # the host still shows the rejected text, put its caret back
                self.move_caret(self.caret)
                if self.on_limit_exceeded:
                    self.on_limit_exceeded(outcome)
        return outcome

    def commit(self, value) -> bool:
        if value == self.last_committed:
            return False
        self.last_committed = value
        if self.on_value_changed:
            self.on_value_changed(value)
        return True

    def report_caret(self, caret: int = None):
        """Syncs the caret after the host moved it (click, arrow keys, ...)."""
        if caret is None:
            caret = self.get_caret()
        self.caret = max(0, min(caret, len(self.display_text)))

    def reconcile(self, value) -> bool:
        """Adopts a value supplied by the owner, returns whether the field changed."""
        if value == self.last_committed:
            return False
        self.display_text = render(to_canonical(value), self.config)
        self.last_committed = value
        log(f"reconciled external value {value!r}")
        self.move_caret(len(self.display_text))
        return True

    def move_caret(self, caret: int):
        self.caret = caret
        if self.schedule is None:
            self.pending_caret.append(self._write_caret)
        else:
            self.schedule(self._write_caret)

    def _write_caret(self):
        self.set_caret(self.caret)

    def flush_caret(self):
        """Writes queued caret corrections, for hosts without a scheduler."""
        pending, self.pending_caret = self.pending_caret, []
        for write in pending:
            write()

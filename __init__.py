# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

def nottest(obj):
    obj.__test__ = False
    return obj


@nottest
def press_before(keys):
    async def run_before(pilot):
        for k in keys:
            await pilot.press(k)
    return run_before


@nottest
class Host:
    """Stand-in for a text widget, records caret writes and notifications."""

    def __init__(self, caret=0):
        self.caret = caret
        self.carets = []
        self.values = []
        self.violations = []

    def get_caret(self):
        return self.caret

    def set_caret(self, caret):
        self.caret = caret
        self.carets.append(caret)

    def on_value_changed(self, value):
        self.values.append(value)

    def on_limit_exceeded(self, violation):
        self.violations.append(violation)

    def callbacks(self):
        return dict(get_caret=self.get_caret,
                    set_caret=self.set_caret,
                    on_value_changed=self.on_value_changed,
                    on_limit_exceeded=self.on_limit_exceeded)

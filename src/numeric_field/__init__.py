#! /bin/env python
# -*- coding:utf-8 -*-
#  This Source Code Form is subject to the terms of the Mozilla Public
#  License, v. 2.0. If a copy of the MPL was not distributed with this
#  file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Numeric Field

Usage:
  numeric_field [options]
  numeric_field (-h | --help)
  numeric_field --version

Options:
  -h --help               Show this screen.
  --version               Show version.
  --value=<number>        Initial value of the field.
  --separator=<char>      Group separator, a single character.
  --limit=<digits>        Digit limit as `integer.decimal`, e.g. `10.2` or `.2`.
  --max=<number>          Largest accepted value.
  --min=<number>          Smallest accepted value.
  --precise               Report values as exact numeral strings.
  --data-folder=<dpath>   Use the specified folder-path as data-folder for this session

"""

from .core import CONFIG, FieldConfig, normalize, to_canonical
from .widgets import NumericInput

from pathlib import Path
import importlib.metadata
import sys

from docopt import docopt

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Label, Static

from rich.text import Text
from rich.style import Style

__version__ = importlib.metadata.version("numeric_field")


class ValueLabel(Static):
    """Shows the committed value of the field."""

    DEFAULT_CSS = """
    ValueLabel {
        padding: 0 1;
        height: 1;
    }
    """

    fmt_none = Style(italic=True, dim=True)
    fmt_value = Style(bold=True)
    fmt_negative = Style(bold=True, color="red")

    number = None

    def show_value(self, value):
        self.number = value
        if value is None:
            self.update(Text("no value", style=self.fmt_none))
            return
        negative = str(value).startswith("-")
        text = Text("Value: ")
        text.append(repr(value), style=self.fmt_negative if negative else self.fmt_value)
        self.update(text)


class NumericFieldApp(App):
    TITLE = "Numeric Field"

    # checked before the bindings of the focused input
    BINDINGS = [
        Binding("escape", "clear", "Clear", priority=True),
        Binding("ctrl+r", "reset", "Reset", priority=True),
    ]

    def __init__(self, config: FieldConfig = None, value=None, testrun=False, *args, **kwargs):
        # Suppresses toasts that differ based on test environment
        self._testrun = testrun
        self.field_config = config or FieldConfig.from_store(CONFIG.store["field"])
        self.initial_value = value
        super().__init__(*args, **kwargs)

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.describe_config())
            yield NumericInput(self.initial_value, self.field_config, id="number")
            yield ValueLabel(id="value")
        yield Footer()

    def describe_config(self) -> str:
        parts = [f"separator `{self.field_config.separator}`"]
        if self.field_config.limit:
            parts += [f"limit {self.field_config.limit}"]
        if self.field_config.max is not None:
            parts += [f"max {self.field_config.max}"]
        if self.field_config.min is not None:
            parts += [f"min {self.field_config.min}"]
        if self.field_config.precise:
            parts += ["precise"]
        return ", ".join(parts)

    def on_mount(self) -> None:
        self.query_one(ValueLabel).show_value(self.initial_value)
        self.query_one(NumericInput).focus()

    def on_numeric_input_value_changed(self, event: NumericInput.ValueChanged) -> None:
        self.query_one(ValueLabel).show_value(event.value)

    def on_numeric_input_limit_exceeded(self, event: NumericInput.LimitExceeded) -> None:
        violation = event.violation
        if not self._testrun:
            self.notify(f"Limit `{violation.kind}` exceeded: {violation.actual} (allowed: {violation.bound})",
                        severity="warning",
                        timeout=3)

    def action_clear(self):
        self.set_number(None)

    def action_reset(self):
        self.set_number(self.initial_value)

    def set_number(self, value):
        field = self.query_one(NumericInput)
        field.number = value
        self.query_one(ValueLabel).show_value(field.number)


def parse_value(text: str | None, config: FieldConfig):
    if text is None:
        return None
    return normalize(to_canonical(text), config.precise)


def main():
    arguments = docopt(__doc__, version=__version__)
    if arguments["--data-folder"]:
        CONFIG.dpath_data = Path(arguments["--data-folder"]).absolute()

    try:
        config = FieldConfig.from_store(CONFIG.store["field"],
                                        separator=arguments["--separator"],
                                        limit=arguments["--limit"],
                                        max=arguments["--max"],
                                        min=arguments["--min"],
                                        precise=arguments["--precise"] or None)
        value = parse_value(arguments["--value"], config)
    except ValueError as e:
        sys.exit(f"numeric_field: {e}")

    app = NumericFieldApp(config=config, value=value)
    try:
        app.run()
    finally:
        CONFIG.store.sync()


if __name__ == "__main__":
    main()

"""Interactive prompts and progress messages.

Workflows talk to the user only through a Console so they can run against a
scripted fake in tests. ClickConsole is the real terminal implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import click

# (label shown to the user, value returned)
type Choice = tuple[str, str]


class Console(Protocol):
    def message(self, text: str) -> None: ...

    def warning(self, text: str) -> None: ...

    def confirm(self, question: str, default: bool = True) -> bool: ...

    def choose(self, question: str, choices: Sequence[Choice]) -> str: ...

    def choose_many(
        self, question: str, choices: Sequence[Choice], checked: Sequence[str] = ()
    ) -> list[str]: ...

    def text(self, question: str) -> str: ...


@dataclass
class ClickConsole:
    """Numbered menus on the terminal. With err=True prompts and menus go to stderr."""

    err: bool = False

    def message(self, text: str) -> None:
        click.echo(text, err=self.err)

    def warning(self, text: str) -> None:
        click.secho(text, fg="yellow", err=self.err)

    def confirm(self, question: str, default: bool = True) -> bool:
        return click.confirm(question, default=default, err=self.err)

    def choose(self, question: str, choices: Sequence[Choice]) -> str:
        click.echo(question, err=self.err)
        for i, (label, _) in enumerate(choices, start=1):
            click.echo(f"  [{i}] {label}", err=self.err)
        index = click.prompt("Selection", type=click.IntRange(1, len(choices)), err=self.err)
        return choices[index - 1][1]

    def choose_many(
        self, question: str, choices: Sequence[Choice], checked: Sequence[str] = ()
    ) -> list[str]:
        click.echo(question, err=self.err)
        defaults = []
        for i, (label, value) in enumerate(choices, start=1):
            mark = "x" if value in checked else " "
            if value in checked:
                defaults.append(str(i))
            click.echo(f"  [{mark}] {i}. {label}", err=self.err)

        while True:
            raw = click.prompt(
                "Selections (comma separated, '-' for none)",
                default=",".join(defaults) or "-",
                show_default=True,
                err=self.err,
            )
            selected = _parse_selections(raw, len(choices))
            if selected is not None:
                return [choices[i - 1][1] for i in selected]
            click.secho(
                f"Selections must be numbers between 1 and {len(choices)}",
                fg="yellow",
                err=self.err,
            )

    def text(self, question: str) -> str:
        return click.prompt(question, default="", show_default=False, err=self.err).strip()


def _parse_selections(raw: str, count: int) -> list[int] | None:
    """Parse "1, 3" into [1, 3]. None if anything is out of range or not a number."""
    raw = raw.strip()
    if raw in ("", "-"):
        return []
    selected: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= count:
            return None
        if int(part) not in selected:
            selected.append(int(part))
    return selected

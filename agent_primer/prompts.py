"""
Interactive terminal prompts.

Every prompt returns either ``Selected(value)`` or ``CANCELLED``; callers
match on the result instead of catching exceptions.  ``RichPrompter`` is the
terminal implementation; tests substitute a scripted one with the same
methods.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Generic, Protocol, Sequence, TypeVar, Union

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

T = TypeVar("T")


@dataclass(frozen=True)
class Selected(Generic[T]):
    value: T


@dataclass(frozen=True)
class Cancelled:
    pass


CANCELLED = Cancelled()

PromptResult = Union[Selected[T], Cancelled]


@dataclass(frozen=True)
class Option(Generic[T]):
    value: T
    label: str
    hint: str | None = None


class Prompter(Protocol):
    def multiselect(self, message: str, options: Sequence[Option[Any]]) -> PromptResult: ...

    def select(self, message: str, options: Sequence[Option[Any]]) -> PromptResult: ...

    def banner(self, title: str, subtitle: str = "") -> None: ...

    def message(self, text: str) -> None: ...

    def note(self, body: str, title: str) -> None: ...


_RANGE = re.compile(r"^(\d+)-(\d+)$")


def parse_selection(answer: str, count: int) -> list[int]:
    """Turn ``"1 3"``, ``"1,3"``, ``"2-4"`` or ``"all"`` into 0-based indices.

    Indices come back sorted and unique.  Empty input selects nothing.
    Raises ValueError on anything out of range or unparseable.
    """
    answer = answer.strip().lower()
    if not answer:
        return []
    if answer in ("all", "*"):
        return list(range(count))

    chosen = set()
    for token in re.split(r"[\s,]+", answer):
        if not token:
            continue
        match = _RANGE.match(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if start > end:
                start, end = end, start
            numbers = range(start, end + 1)
        elif token.isdigit():
            numbers = range(int(token), int(token) + 1)
        else:
            raise ValueError(f"Not a number or range: {token!r}")

        for number in numbers:
            if not 1 <= number <= count:
                raise ValueError(f"{number} is out of range (1-{count})")
            chosen.add(number - 1)

    return sorted(chosen)


class RichPrompter:
    """Numbered-list prompts on a rich Console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _show_options(self, message: str, options: Sequence[Option[Any]]) -> None:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(justify="right", style="cyan")
        table.add_column()
        table.add_column(style="dim")
        for number, option in enumerate(options, start=1):
            table.add_row(str(number), escape(option.label), escape(option.hint or ""))

        self.console.print()
        self.console.print(f"[bold reverse] {escape(message)} [/]")
        self.console.print(table)

    def multiselect(self, message: str, options: Sequence[Option[Any]]) -> PromptResult:
        self._show_options(message, options)
        while True:
            try:
                answer = Prompt.ask(
                    "Select (e.g. 1 3, 2-4, all; Enter for none; q to cancel)",
                    default="",
                    show_default=False,
                    console=self.console,
                )
            except (KeyboardInterrupt, EOFError):
                return CANCELLED

            if answer.strip().lower() in ("q", "quit"):
                return CANCELLED
            try:
                indices = parse_selection(answer, len(options))
            except ValueError as exc:
                self.console.print(f"[red]{escape(str(exc))}[/]")
                continue
            return Selected([options[i].value for i in indices])

    def select(self, message: str, options: Sequence[Option[Any]]) -> PromptResult:
        self._show_options(message, options)
        choices = [str(number) for number in range(1, len(options) + 1)]
        try:
            answer = Prompt.ask("Choose", choices=choices, default="1", console=self.console)
        except (KeyboardInterrupt, EOFError):
            return CANCELLED
        return Selected(options[int(answer) - 1].value)

    def banner(self, title: str, subtitle: str = "") -> None:
        self.console.print(f"\n  [bold reverse] {escape(title)} [/]\n")
        if subtitle:
            self.console.print(f"  {escape(subtitle)}\n")

    def message(self, text: str) -> None:
        self.console.print(escape(text))

    def note(self, body: str, title: str) -> None:
        self.console.print(Panel(escape(body), title=escape(title), expand=False))

"""
Selection wizard: pick primitives, confirm, and assemble the system prompt.

States::

    BROWSING -> CONFIRMING -> LAUNCH
                           -> BROWSING   ("start over", selections dropped)
                           -> CANCELLED

Cancelling any picker ends the wizard immediately.  The recent cache passed
in is only read here; it is written once, by the caller, after LAUNCH.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from agent_primer.cache import cache_key, sort_by_recent
from agent_primer.errors import NoPrimitivesFound
from agent_primer.log import get_logger
from agent_primer.models import PrimitiveItem, RecentCache
from agent_primer.primitives import Primitive, find_primitive
from agent_primer.prompts import Cancelled, Option, Prompter, Selected

logger = get_logger("wizard")

CONFIRM_YES = "yes"
CONFIRM_RESTART = "no"
CONFIRM_EXIT = "exit"

CONFIRM_OPTIONS = [
    Option(CONFIRM_YES, "Yes, launch agent"),
    Option(CONFIRM_RESTART, "No, start over"),
    Option(CONFIRM_EXIT, "Exit"),
]


class WizardState(Enum):
    BROWSING = "browsing"
    CONFIRMING = "confirming"
    LAUNCH = "launch"
    CANCELLED = "cancelled"


@dataclass
class WizardResult:
    state: WizardState
    selected: list[PrimitiveItem] = field(default_factory=list)

    @property
    def cancelled(self) -> bool:
        return self.state is WizardState.CANCELLED


def discover_all(registry: Sequence[Primitive]) -> list[PrimitiveItem]:
    """Run discovery for every primitive type, in registry order."""
    items: list[PrimitiveItem] = []
    for primitive in registry:
        items.extend(primitive.discover_items())
    if not items:
        raise NoPrimitivesFound("No primitives found")
    return items


def group_by_type(items: Sequence[PrimitiveItem]) -> dict[str, list[PrimitiveItem]]:
    """Group items by type, keeping first-seen order of types and items."""
    groups: dict[str, list[PrimitiveItem]] = {}
    for item in items:
        groups.setdefault(item.type, []).append(item)
    return groups


def count_line(registry: Sequence[Primitive], items: Sequence[PrimitiveItem]) -> str:
    """``"3 skills  |  1 domains"`` for the types that have items."""
    groups = group_by_type(items)
    parts = [
        f"{len(groups[p.type])} {p.label.lower()}" for p in registry if p.type in groups
    ]
    return "  |  ".join(parts)


def selection_summary(items: Sequence[PrimitiveItem]) -> str:
    return "\n".join(f"  {item.name} ({item.source.value})" for item in items)


class SelectionWizard:
    """Drives the pickers and the confirm/restart loop."""

    def __init__(
        self,
        registry: Sequence[Primitive],
        items: Sequence[PrimitiveItem],
        cache: RecentCache,
        prompter: Prompter,
    ):
        self.registry = list(registry)
        self.cache = cache
        self.prompter = prompter
        self.recent_keys = set(cache.recent)
        self.sorted_items = sort_by_recent(items, cache)
        self.counts = count_line(self.registry, self.sorted_items)

    def run(self) -> WizardResult:
        state = WizardState.BROWSING
        selected: list[PrimitiveItem] = []

        while True:
            if state is WizardState.BROWSING:
                picked = self._browse()
                if isinstance(picked, Cancelled):
                    return WizardResult(WizardState.CANCELLED)
                selected = picked
                state = WizardState.CONFIRMING

            elif state is WizardState.CONFIRMING:
                state = self._confirm(selected)

            elif state is WizardState.LAUNCH:
                return WizardResult(WizardState.LAUNCH, selected)

            else:
                return WizardResult(WizardState.CANCELLED)

    def options_for(self, items: Sequence[PrimitiveItem]) -> list[Option[PrimitiveItem]]:
        return [
            Option(
                item,
                f"[{item.source.value}] {item.name}",
                "recent" if cache_key(item) in self.recent_keys else None,
            )
            for item in items
        ]

    def _browse(self) -> list[PrimitiveItem] | Cancelled:
        self.prompter.banner("Agent Primer", self.counts)

        groups = group_by_type(self.sorted_items)
        selected: list[PrimitiveItem] = []
        for primitive in self.registry:
            items = groups.get(primitive.type)
            if not items:
                continue

            result = self.prompter.multiselect(primitive.label, self.options_for(items))
            if isinstance(result, Cancelled):
                return result
            selected.extend(result.value)
        return selected

    def _confirm(self, selected: Sequence[PrimitiveItem]) -> WizardState:
        if selected:
            self.prompter.message(f"\n  Selected:\n{selection_summary(selected)}\n")
        else:
            self.prompter.message("\n  No primitives selected.\n")

        result = self.prompter.select("Confirm", CONFIRM_OPTIONS)
        if isinstance(result, Selected):
            if result.value == CONFIRM_YES:
                return WizardState.LAUNCH
            if result.value == CONFIRM_RESTART:
                return WizardState.BROWSING
        return WizardState.CANCELLED


def assemble_prompt(registry: Sequence[Primitive], selected: Sequence[PrimitiveItem]) -> str:
    """Load every selected item and join the per-type prompt blocks.

    Read failures propagate; there is no partial prompt.
    """
    sections: list[str] = []
    for type_, items in group_by_type(selected).items():
        primitive = find_primitive(list(registry), type_)
        if primitive is None:
            logger.warning(f"No primitive registered for type '{type_}', skipping")
            continue
        contents = [primitive.load_content(item) for item in items]
        sections.append(primitive.format_for_prompt(contents))
    return "\n\n".join(sections)

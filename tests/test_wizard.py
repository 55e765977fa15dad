"""Tests for the selection wizard state machine and prompt assembly."""

import pytest

from agent_primer.cache import cache_key
from agent_primer.errors import NoPrimitivesFound
from agent_primer.models import RecentCache
from agent_primer.primitives import build_registry
from agent_primer.prompts import CANCELLED
from agent_primer.wizard import (
    CONFIRM_EXIT,
    CONFIRM_RESTART,
    CONFIRM_YES,
    SelectionWizard,
    WizardState,
    assemble_prompt,
    count_line,
    discover_all,
)
from conftest import write_primitive


@pytest.fixture
def registry(config):
    write_primitive(config.global_root("skills"), "alpha", name="alpha")
    write_primitive(config.global_root("skills"), "beta", name="beta")
    write_primitive(config.local_root("domains"), "billing", filename="DOMAIN.md", name="billing")
    return build_registry(config)


@pytest.fixture
def items(registry):
    return discover_all(registry)


def test_discover_all_empty(config):
    with pytest.raises(NoPrimitivesFound):
        discover_all(build_registry(config))


def test_count_line(registry, items):
    assert count_line(registry, items) == "2 skills  |  1 domains"


def test_pickers_follow_registry_order(registry, items, prompter_factory):
    prompter = prompter_factory(multiselect=[[0], [0]], select=[CONFIRM_YES])

    result = SelectionWizard(registry, items, RecentCache(), prompter).run()

    assert result.state is WizardState.LAUNCH
    assert [message for message, _ in prompter.pickers] == ["Skills", "Domains"]
    assert [(i.type, i.name) for i in result.selected] == [("skill", "alpha"), ("domain", "billing")]
    assert prompter.banners == [("Agent Primer", "2 skills  |  1 domains")]


def test_recent_items_listed_first_with_hint(registry, items, prompter_factory):
    beta = next(i for i in items if i.name == "beta")
    cache = RecentCache(recent={cache_key(beta): 1000})
    prompter = prompter_factory(multiselect=[[], []], select=[CONFIRM_YES])

    SelectionWizard(registry, items, cache, prompter).run()

    skill_options = prompter.pickers[0][1]
    assert [o.label for o in skill_options] == ["[global] beta", "[global] alpha"]
    assert [o.hint for o in skill_options] == ["recent", None]
    assert prompter.pickers[1][1][0].label == "[local] billing"


def test_restart_discards_previous_selection(registry, items, prompter_factory):
    prompter = prompter_factory(
        multiselect=[[0, 1], [0], [1], []],
        select=[CONFIRM_RESTART, CONFIRM_YES],
    )

    result = SelectionWizard(registry, items, RecentCache(), prompter).run()

    assert result.state is WizardState.LAUNCH
    assert [i.name for i in result.selected] == ["beta"]
    assert len(prompter.pickers) == 4
    assert len(prompter.banners) == 2


def test_empty_selection_still_confirms(registry, items, prompter_factory):
    prompter = prompter_factory(multiselect=[[], []], select=[CONFIRM_YES])

    result = SelectionWizard(registry, items, RecentCache(), prompter).run()

    assert result.state is WizardState.LAUNCH
    assert result.selected == []
    assert any("No primitives selected." in m for m in prompter.messages)


def test_summary_lists_selection(registry, items, prompter_factory):
    prompter = prompter_factory(multiselect=[[1], [0]], select=[CONFIRM_YES])

    SelectionWizard(registry, items, RecentCache(), prompter).run()

    assert "  beta (global)\n  billing (local)" in prompter.messages[-1]


def test_cancelled_picker_stops_immediately(registry, items, prompter_factory):
    prompter = prompter_factory(multiselect=[CANCELLED])

    result = SelectionWizard(registry, items, RecentCache(), prompter).run()

    assert result.cancelled
    assert result.selected == []
    assert len(prompter.pickers) == 1
    assert prompter.confirmations == 0


@pytest.mark.parametrize("answer", [CONFIRM_EXIT, CANCELLED])
def test_exit_at_confirmation(registry, items, prompter_factory, answer):
    prompter = prompter_factory(multiselect=[[0], [0]], select=[answer])

    result = SelectionWizard(registry, items, RecentCache(), prompter).run()

    assert result.state is WizardState.CANCELLED
    assert result.selected == []


def test_types_without_items_get_no_picker(config, prompter_factory):
    write_primitive(config.global_root("skills"), "solo")
    registry = build_registry(config)
    prompter = prompter_factory(multiselect=[[0]], select=[CONFIRM_YES])

    SelectionWizard(registry, discover_all(registry), RecentCache(), prompter).run()

    assert [message for message, _ in prompter.pickers] == ["Skills"]


class TestAssemblePrompt:
    def test_blocks_joined_by_type(self, registry, items):
        domain = next(i for i in items if i.type == "domain")
        skill = next(i for i in items if i.name == "alpha")

        prompt = assemble_prompt(registry, [skill, domain])

        assert prompt.index("ACTIVE SKILLS") < prompt.index("DOMAIN KNOWLEDGE")
        assert "END AGENT PRIMER\n" + "=" * 72 + "\n\n" + "=" * 72 in prompt

    def test_items_of_one_type_share_a_block(self, registry, items):
        skills = [i for i in items if i.type == "skill"]

        prompt = assemble_prompt(registry, skills)

        assert prompt.count("ACTIVE SKILLS FOR THIS SESSION") == 1
        assert "## alpha" in prompt and "## beta" in prompt

    def test_missing_file_aborts(self, registry, items):
        skill = next(i for i in items if i.name == "alpha")
        skill.path.unlink()

        with pytest.raises(FileNotFoundError):
            assemble_prompt(registry, [skill])

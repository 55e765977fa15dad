"""
agent-primer CLI — entry points ``ap`` and ``apx``.

Usage:
    ap [options] [-- agent-options]     Interactive primitive selection
    apx [options] [-- agent-options]    Same, with permission checks skipped
    ap --list                           List available primitives
    ap --clear-recent                   Forget recent selections

Anything agent-primer doesn't recognise is passed to the agent unchanged.
Everything after ``--`` is always passed through.
"""

from __future__ import annotations

import argparse
import locale
import sys
from dataclasses import dataclass, field, replace
from typing import Callable, Sequence

from agent_primer import __version__
from agent_primer.cache import RecentCacheStore, cache_key, sort_by_recent
from agent_primer.config import PrimerConfig
from agent_primer.errors import AgentNotFound, NoPrimitivesFound
from agent_primer.launcher import build_agent_args, estimate_tokens, launch_agent
from agent_primer.log import get_logger, setup_logging
from agent_primer.models import PrimitiveItem
from agent_primer.primitives import Primitive, build_registry, find_primitive
from agent_primer.prompts import Prompter, RichPrompter
from agent_primer.wizard import (
    SelectionWizard,
    assemble_prompt,
    discover_all,
    group_by_type,
    selection_summary,
)

logger = get_logger("cli")

DESCRIPTION_WIDTH = 70

HELP_FLAGS = ("-h", "--help")
LIST_FLAGS = ("-l", "--list")
CLEAR_RECENT_FLAG = "--clear-recent"

Launcher = Callable[[str, Sequence[str]], int]


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------

@dataclass
class ParsedArgs:
    help: bool = False
    clear_recent: bool = False
    list_only: bool = False
    dangerous: bool = False
    agent_args: list[str] = field(default_factory=list)


def _build_parser(dangerous: bool) -> argparse.ArgumentParser:
    cmd = "apx" if dangerous else "ap"
    dangerous_note = (
        "\nDANGEROUS MODE: --dangerously-skip-permissions is auto-enabled\n"
        if dangerous
        else ""
    )
    parser = argparse.ArgumentParser(
        prog=cmd,
        add_help=False,
        allow_abbrev=False,
        usage=f"{cmd} [options] [-- agent-options]",
        description=(
            f"agent-primer ({cmd}) {__version__} - Prime your agent sessions "
            f"with preloaded primitives\n{dangerous_note}"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Agent options:\n"
            "  All other options are passed directly to the agent. Use -- to explicitly\n"
            "  separate agent-primer options from agent options.\n"
            "\n"
            "Examples:\n"
            "  ap                          # Interactive primitive selection\n"
            "  ap --list                   # List all available primitives\n"
            "  ap -- --model opus          # Use Opus model\n"
            "  ap -- -p \"prompt\"           # Run with a prompt (non-interactive)\n"
            "  apx                         # Skip all permission prompts\n"
            "\n"
            "Primitive locations:\n"
            "  Skills:   ~/.claude/skills/    ./.claude/skills/\n"
            "  Domains:  ~/.claude/domains/   ./.claude/domains/\n"
            "\n"
            "Environment:\n"
            "  AGENT_PRIMER_DANGEROUS=1    Same as running apx\n"
            "  AGENT_PRIMER_AGENT          Agent executable (default: claude)\n"
            "  AGENT_PRIMER_LOG_LEVEL      Log level (default: INFO)\n"
        ),
    )
    parser.add_argument(*HELP_FLAGS, action="store_true", help="Show this help message.")
    parser.add_argument(
        *LIST_FLAGS,
        action="store_true",
        help="List available primitives and exit.",
    )
    parser.add_argument(
        CLEAR_RECENT_FLAG,
        action="store_true",
        help="Clear the recent selections cache.",
    )
    return parser


def parse_args(argv: Sequence[str], dangerous: bool = False) -> ParsedArgs:
    """Split ``argv`` into agent-primer flags and agent arguments.

    Our flags only match exactly; bundled short options such as ``-lc`` go
    to the agent untouched.  Agent arguments are everything after ``--``
    followed by the unrecognised tokens before it.
    """
    argv = list(argv)
    passthrough: list[str] = []
    if "--" in argv:
        separator = argv.index("--")
        argv, passthrough = argv[:separator], argv[separator + 1:]

    args = ParsedArgs(dangerous=dangerous)
    extra: list[str] = []
    for token in argv:
        if token in HELP_FLAGS:
            args.help = True
        elif token in LIST_FLAGS:
            args.list_only = True
        elif token == CLEAR_RECENT_FLAG:
            args.clear_recent = True
        else:
            extra.append(token)

    args.agent_args = passthrough + extra
    return args


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_help(args: ParsedArgs) -> int:
    print(_build_parser(args.dangerous).format_help())
    return 0


def cmd_clear_recent(store: RecentCacheStore) -> int:
    try:
        if store.clear():
            print("Recent selections cache cleared")
        else:
            print("No recent selections cache to clear")
    except OSError as exc:
        logger.error(f"Failed to clear cache: {exc}")
    return 0


def _print_item(item: PrimitiveItem, recent: bool) -> None:
    prefix = "*" if recent else " "
    description = item.description[:DESCRIPTION_WIDTH]
    if len(item.description) > DESCRIPTION_WIDTH:
        description += "..."
    print(f"{prefix} [{item.source.value}] {item.name}")
    print(f"    {description}")


def cmd_list(registry: Sequence[Primitive], items: Sequence[PrimitiveItem], store: RecentCacheStore) -> int:
    cache = store.load()
    sorted_items = sort_by_recent(items, cache)
    groups = group_by_type(sorted_items)

    print(f"Found {len(items)} primitive(s):\n")

    if len(groups) > 1:
        for type_, group in groups.items():
            primitive = find_primitive(list(registry), type_)
            print(f"{primitive.label if primitive else type_}:")
            for item in group:
                _print_item(item, cache_key(item) in cache.recent)
            print()
    else:
        for item in sorted_items:
            _print_item(item, cache_key(item) in cache.recent)
    return 0


def cmd_launch(
    args: ParsedArgs,
    config: PrimerConfig,
    registry: Sequence[Primitive],
    items: Sequence[PrimitiveItem],
    store: RecentCacheStore,
    prompter: Prompter,
    launcher: Launcher,
) -> int:
    wizard = SelectionWizard(registry, items, store.load(), prompter)
    result = wizard.run()
    if result.cancelled:
        prompter.message("Cancelled")
        return 0

    if not result.selected:
        logger.info("No primitives selected. Launching agent without preloaded context...\n")
        return launcher(config.agent_command, build_agent_args("", args.dangerous, args.agent_args))

    store.update(result.selected)
    system_prompt = assemble_prompt(registry, result.selected)

    prompter.note(
        f"{selection_summary(result.selected)}\n\n  ~{estimate_tokens(system_prompt):,} tokens",
        f"Launching {config.agent_command} with",
    )
    return launcher(
        config.agent_command,
        build_agent_args(system_prompt, args.dangerous, args.agent_args),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run(
    args: ParsedArgs,
    config: PrimerConfig,
    prompter: Prompter | None = None,
    launcher: Launcher = launch_agent,
) -> int:
    if args.help:
        return cmd_help(args)

    if args.dangerous:
        logger.warning("DANGEROUS MODE: Permission checks will be skipped\n")

    store = RecentCacheStore(config.cache_file)
    if args.clear_recent:
        return cmd_clear_recent(store)

    registry = build_registry(config)
    try:
        items = discover_all(registry)
    except NoPrimitivesFound:
        logger.warning("No primitives found. Check your directories:")
        logger.warning("  Skills:   ~/.claude/skills/    ./.claude/skills/")
        logger.warning("  Domains:  ~/.claude/domains/   ./.claude/domains/")
        return 1

    if args.list_only:
        return cmd_list(registry, items, store)

    try:
        return cmd_launch(
            args, config, registry, items, store, prompter or RichPrompter(), launcher
        )
    except AgentNotFound as exc:
        logger.error(f"Error: {exc}")
        return 1


def main(argv: list[str] | None = None, force_dangerous: bool = False) -> None:
    config = PrimerConfig.from_env()
    if force_dangerous:
        config = replace(config, dangerous=True)

    setup_logging(config.log_level)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        pass

    args = parse_args(sys.argv[1:] if argv is None else argv, dangerous=config.dangerous)
    try:
        code = run(args, config)
    except KeyboardInterrupt:
        print("\nCancelled")
        code = 0
    except Exception:
        logger.exception("Unhandled error")
        code = 1
    sys.exit(code)


def main_dangerous(argv: list[str] | None = None) -> None:
    main(argv, force_dangerous=True)


if __name__ == "__main__":
    main()

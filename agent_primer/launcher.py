"""Builds the agent command line and hands the terminal over to it."""

from __future__ import annotations

import math
import subprocess
from typing import Sequence

from agent_primer.errors import AgentNotFound
from agent_primer.log import get_logger

logger = get_logger("launcher")

DANGEROUS_FLAG = "--dangerously-skip-permissions"
SYSTEM_PROMPT_FLAG = "--append-system-prompt"


def build_agent_args(system_prompt: str, dangerous: bool, passthrough: Sequence[str]) -> list[str]:
    args: list[str] = []
    if dangerous:
        args.append(DANGEROUS_FLAG)
    if system_prompt:
        args += [SYSTEM_PROMPT_FLAG, system_prompt]
    args += list(passthrough)
    return args


def estimate_tokens(text: str) -> int:
    """Rough token count (4 characters per token)."""
    return math.ceil(len(text) / 4)


def launch_agent(command: str, args: Sequence[str]) -> int:
    """Run the agent in the foreground with inherited stdio.  Returns its exit code."""
    cmd = [command] + list(args)
    logger.debug(f"Launching {command} with {len(args)} argument(s)")
    try:
        result = subprocess.run(cmd)
    except FileNotFoundError as exc:
        raise AgentNotFound(command) from exc
    except KeyboardInterrupt:
        return 130
    # Killed by a signal: no exit code of its own, report success like a clean exit.
    if result.returncode is None or result.returncode < 0:
        return 0
    return result.returncode

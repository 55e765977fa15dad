"""
Runtime configuration for agent-primer.

Everything that depends on the process environment (home directory, working
directory, cache location, env toggles) is resolved once here and handed to
the discovery and cache components, so tests can point them at fake trees.

Environment variables:
    AGENT_PRIMER_DANGEROUS   "1" auto-adds --dangerously-skip-permissions
    AGENT_PRIMER_AGENT       agent executable to launch (default: claude)
    AGENT_PRIMER_LOG_LEVEL   logging level name (default: INFO)
    XDG_CACHE_HOME           cache root (default: ~/.cache)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


DEFAULT_AGENT_COMMAND = "claude"
CACHE_DIR_NAME = "agent-primer"
CACHE_FILE_NAME = "recent.json"


@dataclass(frozen=True)
class PrimerConfig:
    home: Path
    cwd: Path
    cache_root: Path
    dangerous: bool = False
    agent_command: str = DEFAULT_AGENT_COMMAND
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
        cwd: Path | None = None,
    ) -> PrimerConfig:
        env = os.environ if environ is None else environ
        home = home or Path.home()
        cwd = cwd or Path.cwd()

        xdg_cache = env.get("XDG_CACHE_HOME", "")
        cache_root = Path(xdg_cache) if xdg_cache else home / ".cache"

        return cls(
            home=home,
            cwd=cwd,
            cache_root=cache_root,
            dangerous=env.get("AGENT_PRIMER_DANGEROUS") == "1",
            agent_command=env.get("AGENT_PRIMER_AGENT") or DEFAULT_AGENT_COMMAND,
            log_level=(env.get("AGENT_PRIMER_LOG_LEVEL") or "INFO").upper(),
        )

    def global_root(self, kind: str) -> Path:
        """~/.claude/<kind>, e.g. ~/.claude/skills"""
        return self.home / ".claude" / kind

    def local_root(self, kind: str) -> Path:
        """./.claude/<kind> relative to the working directory."""
        return self.cwd / ".claude" / kind

    @property
    def cache_file(self) -> Path:
        return self.cache_root / CACHE_DIR_NAME / CACHE_FILE_NAME

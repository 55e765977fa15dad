"""
Shared machinery for primitive types.

A primitive type (skills, domains) is a directory convention:

    <root>/<entry>/SKILL.md          one item per entry directory
    <root>/<entry>/references/...    optional files listed in the prompt
    <root>/SKILL.md                  the root itself may hold the file

Subclasses only declare names and prompt wording; discovery, parsing,
loading and formatting all live here.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Sequence

import yaml
from pydantic import ValidationError

from agent_primer.config import PrimerConfig
from agent_primer.frontmatter import split_frontmatter
from agent_primer.log import get_logger
from agent_primer.models import (
    Frontmatter,
    PrimitiveContent,
    PrimitiveItem,
    ReferenceMetadata,
    Source,
)

logger = get_logger("discovery")

DEFAULT_DESCRIPTION = "No description provided"
REFERENCES_DIR = "references"
DIVIDER = "=" * 72
THIN_DIVIDER = "-" * 72


def discover_paths(root: Path, required_file: str) -> list[Path]:
    """Return every ``required_file`` found directly in ``root`` or one level down.

    Symlinked entries are followed; dangling links are skipped.  Entries that
    can't be inspected are logged and skipped.  Results keep directory
    listing order.
    """
    root = Path(root)
    try:
        if not root.is_dir():
            return []
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as exc:
        logger.warning(f"Cannot read {root}: {exc}")
        return []

    paths: list[Path] = []
    for entry in entries:
        try:
            path = _required_file_for(root, entry, required_file)
        except OSError as exc:
            logger.warning(f"Skipping {root / entry.name}: {exc}")
            continue
        if path is not None:
            paths.append(path)

    return paths


def _required_file_for(root: Path, entry: os.DirEntry, required_file: str) -> Path | None:
    full_path = root / entry.name

    real_path = full_path
    if entry.is_symlink():
        try:
            real_path = full_path.resolve(strict=True)
        except (OSError, RuntimeError):
            return None

    if real_path.is_dir():
        candidate = real_path / required_file
        return candidate if candidate.is_file() else None
    if entry.name == required_file:
        return full_path
    return None


def list_references(primary_file: Path) -> list[str]:
    """Names of the entries in the ``references/`` directory next to a primitive."""
    references_dir = Path(primary_file).parent / REFERENCES_DIR
    if not references_dir.is_dir():
        return []
    return sorted(child.name for child in references_dir.iterdir())


class Primitive(ABC):
    """Base class for a primitive type.

    Subclasses set the ClassVars below.  ``skip_same_root`` skips the local
    scan when it resolves to the global root (home directory == cwd).
    """

    type: ClassVar[str]
    label: ClassVar[str]
    directory: ClassVar[str]
    required_file: ClassVar[str]
    skip_same_root: ClassVar[bool] = False

    header_title: ClassVar[str]
    header_intro: ClassVar[str]
    footer_title: ClassVar[str]

    def __init__(self, global_root: Path, local_root: Path):
        self.global_root = Path(global_root)
        self.local_root = Path(local_root)

    @classmethod
    def from_config(cls, config: PrimerConfig) -> Primitive:
        return cls(config.global_root(cls.directory), config.local_root(cls.directory))

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover_items(self) -> list[PrimitiveItem]:
        """Scan the global then the local root.  Bad files are logged and skipped."""
        roots = [(self.global_root, Source.GLOBAL)]
        if not (self.skip_same_root and _same_path(self.global_root, self.local_root)):
            roots.append((self.local_root, Source.LOCAL))

        items: list[PrimitiveItem] = []
        for root, source in roots:
            for path in discover_paths(root, self.required_file):
                item = self.parse_item(path, source)
                if item is not None:
                    items.append(item)
        return items

    def parse_item(self, path: Path, source: Source) -> PrimitiveItem | None:
        try:
            data, _ = split_frontmatter(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.error(f"Failed to parse {self.type} {path}: {exc}")
            return None

        try:
            frontmatter = Frontmatter.model_validate(data)
        except ValidationError as exc:
            logger.warning(
                f"Invalid {self.type} frontmatter in {path}, using defaults: "
                f"{exc.error_count()} issue(s)"
            )
            frontmatter = Frontmatter()

        name = frontmatter.name if _present(frontmatter.name) else path.parent.name
        description = (
            frontmatter.description if _present(frontmatter.description) else DEFAULT_DESCRIPTION
        )
        return PrimitiveItem(
            type=self.type,
            name=name,
            description=description,
            path=path,
            source=source,
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_content(self, item: PrimitiveItem) -> PrimitiveContent:
        """Read the item's body and its reference listing.

        Read errors propagate: the file existed at discovery time, so a
        failure here aborts the launch.
        """
        _, body = split_frontmatter(item.path.read_text(encoding="utf-8"))
        return PrimitiveContent(
            item=item,
            main_content=body,
            metadata={"references": list_references(item.path)},
        )

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    @abstractmethod
    def references_note(self, content: PrimitiveContent) -> str:
        """Closing line under a section's reference listing."""

    def format_for_prompt(self, contents: Sequence[PrimitiveContent]) -> str:
        header = (
            f"{DIVIDER}\n{self.header_title}\n{DIVIDER}\n\n"
            f"{self.header_intro}\n\n{THIN_DIVIDER}"
        )
        sections = f"\n\n{THIN_DIVIDER}".join(self._format_section(c) for c in contents)
        footer = f"\n\n{DIVIDER}\n{self.footer_title}\n{DIVIDER}"
        return header + sections + footer

    def _format_section(self, content: PrimitiveContent) -> str:
        meta = ReferenceMetadata.model_validate(content.metadata)
        name = content.item.name

        text = f"\n## {name}\n> Source: {content.item.path.parent}\n\n{content.main_content}"
        if meta.references:
            listing = "\n".join(f"- {ref}" for ref in meta.references)
            text += (
                f"\n\n### References bundled with {name}:\n{listing}\n\n"
                f"{self.references_note(content)}"
            )
        return text


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


def _same_path(a: Path, b: Path) -> bool:
    try:
        return a.resolve() == b.resolve()
    except (OSError, RuntimeError):
        return False

"""Data models for primitives and the recent-selections cache."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class Source(str, Enum):
    GLOBAL = "global"  # ~/.claude/<kind>/
    LOCAL = "local"    # ./.claude/<kind>/


class PrimitiveItem(BaseModel):
    """One discovered primitive (a single SKILL.md / DOMAIN.md).

    Items are rebuilt on every discovery pass and never mutated.  Their
    identity for recency purposes is (type, source, name), not the path.
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(description='Primitive discriminator, e.g. "skill" or "domain"')
    name: str = Field(description="Display name, defaults to the containing directory")
    description: str
    path: Path = Field(description="Absolute path to the primary markdown file")
    source: Source


class PrimitiveContent(BaseModel):
    """Loaded body of a selected item.

    ``metadata`` is untyped on purpose: each primitive re-validates it into
    its own shape right before formatting.
    """

    item: PrimitiveItem
    main_content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Frontmatter(BaseModel):
    """Accepted front matter keys.  Anything else in the block is ignored."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[StrictStr] = None
    description: Optional[StrictStr] = None


class ReferenceMetadata(BaseModel):
    """Metadata shape shared by skills and domains."""

    references: List[StrictStr]


class RecentCache(BaseModel):
    """Cache key -> last-selected timestamp in epoch milliseconds."""

    recent: Dict[StrictStr, Union[StrictInt, StrictFloat]] = Field(default_factory=dict)

"""Skills: reusable how-to guides stored as SKILL.md."""

from agent_primer.models import PrimitiveContent
from agent_primer.primitives.base import Primitive


class SkillPrimitive(Primitive):
    type = "skill"
    label = "Skills"
    directory = "skills"
    required_file = "SKILL.md"
    skip_same_root = True

    header_title = "AGENT PRIMER: ACTIVE SKILLS FOR THIS SESSION"
    header_intro = (
        "The following skills were hand-picked for this session. They contain\n"
        "specialized knowledge, patterns, and best practices that are directly\n"
        "relevant to the work ahead. Treat these as authoritative guidance and\n"
        "follow them when applicable to the user's request."
    )
    footer_title = "END AGENT PRIMER"

    def references_note(self, content: PrimitiveContent) -> str:
        return f"Use Skill({content.item.name}) to load any reference file."

"""Domains: background knowledge stored as DOMAIN.md."""

from agent_primer.models import PrimitiveContent
from agent_primer.primitives.base import REFERENCES_DIR, Primitive


class DomainPrimitive(Primitive):
    type = "domain"
    label = "Domains"
    directory = "domains"
    required_file = "DOMAIN.md"
    # Domains scan the local root even when it is the global one.
    skip_same_root = False

    header_title = "AGENT PRIMER: DOMAIN KNOWLEDGE FOR THIS SESSION"
    header_intro = (
        "The following domain knowledge has been loaded for this session. This is\n"
        "reference material describing the concepts, standards, and context\n"
        "relevant to the work ahead. Use it to inform your decisions and avoid\n"
        "redundant research."
    )
    footer_title = "END DOMAIN KNOWLEDGE"

    def references_note(self, content: PrimitiveContent) -> str:
        domain_dir = content.item.path.parent
        return (
            f"These files are available in {domain_dir}/{REFERENCES_DIR}/ and can be read\n"
            "directly when deeper detail is needed."
        )

"""
agent-primer — Prime agent sessions with preloaded skills and domain knowledge.

Discovers markdown primitives under ~/.claude/ and ./.claude/, lets you pick a
set of them interactively, and launches the agent with their content appended
to its system prompt.
"""

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = ["__version__", "__license__"]

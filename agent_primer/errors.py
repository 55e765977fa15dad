"""Exceptions raised by agent_primer."""


class PrimerError(Exception):
    """Base class for agent-primer failures."""


class NoPrimitivesFound(PrimerError):
    """Discovery found nothing in any of the primitive roots."""


class AgentNotFound(PrimerError):
    """The agent executable could not be started."""

    def __init__(self, command: str):
        super().__init__(f"'{command}' not found on PATH. Is the agent CLI installed?")
        self.command = command

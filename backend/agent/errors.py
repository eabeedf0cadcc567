from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIG = 'config'
    NOT_READY = 'not_ready'
    MALFORMED_INTENT = 'malformed_intent'
    COLLABORATOR_FAILURE = 'collaborator_failure'


class AgentError(Exception):
    """Base class for every failure the agent classifies."""

    kind: ErrorKind


class ConfigurationError(AgentError):
    kind = ErrorKind.CONFIG

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} is required")


class NotReadyError(AgentError):
    kind = ErrorKind.NOT_READY

    def __init__(self, resource: str, message: str):
        self.resource = resource
        super().__init__(message)


class MalformedIntentError(AgentError):
    kind = ErrorKind.MALFORMED_INTENT

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class CollaboratorError(AgentError):
    kind = ErrorKind.COLLABORATOR_FAILURE


class ChainOperationError(Exception):
    """Raised by the substrate services when the chain rejects a call."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from agent.errors import AgentError, ErrorKind

logger = logging.getLogger(__name__)

FAILED_TO_PROCESS = "❌ Failed to process request"


class Outcome(str, Enum):
    SUCCESS = 'success'
    UNRECOGNIZED_ACTION = 'unrecognized_action'
    FAILED = 'failed'


@dataclass(frozen=True)
class PromptResult:
    outcome: Outcome
    message: str
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.outcome != Outcome.FAILED


def success(message: str) -> PromptResult:
    return PromptResult(outcome=Outcome.SUCCESS, message=message)


def unrecognized(message: str) -> PromptResult:
    return PromptResult(outcome=Outcome.UNRECOGNIZED_ACTION, message=message)


def failure(error: Exception) -> PromptResult:
    """Log the failure for operators and hide its detail from the user."""
    if isinstance(error, AgentError):
        kind = error.kind
    else:
        kind = ErrorKind.COLLABORATOR_FAILURE

    logger.error("Error processing prompt (%s): %s", kind.value, error, exc_info=error)

    return PromptResult(outcome=Outcome.FAILED, message=FAILED_TO_PROCESS, error_kind=kind)

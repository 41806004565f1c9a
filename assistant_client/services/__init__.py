"""Resource gateways, one per API resource."""

from .assistants import AssistantsService
from .messages import MessagesService
from .run_steps import RunStepsService
from .runs import RunsService
from .threads import ThreadsService

__all__ = ["AssistantsService", "MessagesService", "RunStepsService", "RunsService", "ThreadsService"]

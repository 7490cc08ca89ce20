"""Task envelope routing - selects the handler named by the envelope's task."""

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from neuralpay_gateway.core.exceptions import GatewayError, InvalidTaskError
from neuralpay_gateway.core.provider import Provider
from neuralpay_gateway.core.tasks import (
    run_audio_transcribe,
    run_chat,
    run_code_assist,
    run_data_analysis,
    run_image_edit,
    run_translate,
)

logger = logging.getLogger(__name__)

TaskHandler = Callable[[Any, Provider], Awaitable[dict[str, Any]]]


class TaskKind(str, Enum):
    """The closed set of tasks an envelope may name."""

    CHAT = "chat"
    IMAGE_EDIT = "image-edit"
    DATA_ANALYSIS = "data-analysis"
    TRANSLATE = "translate"
    AUDIO_TRANSCRIBE = "audio-transcribe"
    CODE_ASSIST = "code-assist"


TASK_HANDLERS: dict[TaskKind, TaskHandler] = {
    TaskKind.CHAT: run_chat,
    TaskKind.IMAGE_EDIT: run_image_edit,
    TaskKind.DATA_ANALYSIS: run_data_analysis,
    TaskKind.TRANSLATE: run_translate,
    TaskKind.AUDIO_TRANSCRIBE: run_audio_transcribe,
    TaskKind.CODE_ASSIST: run_code_assist,
}


@dataclass
class TaskResult:
    """HTTP status code and JSON body produced for one envelope."""

    status_code: int
    body: dict[str, Any]
    task: TaskKind | None = None


def resolve_task(envelope: Any) -> TaskKind:
    """
    Map the envelope's ``task`` field to a :class:`TaskKind`.

    Args:
        envelope: The decoded request body

    Returns:
        The matching task kind

    Raises:
        InvalidTaskError: If the body is not an object or names no known task
    """
    task = envelope.get("task") if isinstance(envelope, dict) else None
    if not isinstance(task, str):
        raise InvalidTaskError(task)
    try:
        return TaskKind(task)
    except ValueError:
        raise InvalidTaskError(task) from None


def _error_details(exc: Exception) -> str:
    if isinstance(exc, GatewayError):
        return exc.message
    return str(exc)


class TaskRouter:
    """Stateless dispatcher from task envelopes to task handlers.

    The provider handle is injected at construction; the router keeps no
    other state, so one instance can serve concurrent requests.
    """

    def __init__(self, provider: Provider):
        self.provider = provider

    async def dispatch(self, envelope: Any) -> TaskResult:
        """Run the handler named by ``envelope`` and wrap its outcome in a :class:`TaskResult`."""
        task = None
        try:
            try:
                task = resolve_task(envelope)
            except InvalidTaskError as e:
                logger.warning(f"Rejected envelope: {e.message}")
                return TaskResult(400, {"error": "Invalid task specified"})

            logger.info("Dispatching task %s", task.value)
            body = await TASK_HANDLERS[task](envelope.get("payload"), self.provider)
            return TaskResult(200, body, task)

        except Exception as e:
            logger.exception(f"Error processing task envelope: {e}")
            return TaskResult(500, {"error": "Internal Server Error", "details": _error_details(e)}, task)

    async def handle(self, raw_body: bytes | str) -> TaskResult:
        """Decode a raw JSON request body and dispatch it."""
        try:
            envelope = json.loads(raw_body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Request body is not valid JSON: {e}")
            return TaskResult(500, {"error": "Internal Server Error", "details": str(e)})
        return await self.dispatch(envelope)

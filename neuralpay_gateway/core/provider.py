"""Provider abstraction and its Gemini REST implementation.

The router depends only on the four call shapes of :class:`Provider`, so a
substitute (a test double, another vendor) can be injected in place of
:class:`GeminiProvider`.
"""

import logging
from typing import Any, Protocol

from neuralpay_gateway.core.client import generate_content
from neuralpay_gateway.core.config import GatewayConfig
from neuralpay_gateway.core.exceptions import UpstreamInvalidResponseError

logger = logging.getLogger(__name__)


class Provider(Protocol):
    """The four generative calls the task handlers rely on."""

    async def send_chat(
        self,
        history: list[dict[str, Any]],
        message: str,
        system_instruction: str | None = None,
    ) -> str: ...

    async def generate_image(self, parts: list[dict[str, Any]]) -> list[dict[str, Any]]: ...

    async def generate_json(self, prompt: str, schema: dict[str, Any]) -> str: ...

    async def generate_text(self, parts: list[dict[str, Any]]) -> str: ...


def first_candidate_parts(response: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the content parts of the first candidate in a generateContent response."""
    candidates = response.get("candidates") or []
    if not candidates:
        feedback = response.get("promptFeedback") or {}
        reason = feedback.get("blockReason")
        message = "AI provider returned no candidates"
        if reason:
            message = f"{message} (blocked: {reason})"
        raise UpstreamInvalidResponseError(message)

    content = candidates[0].get("content") or {}
    return content.get("parts") or []


def response_text(response: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate, skipping thought parts."""
    parts = first_candidate_parts(response)
    return "".join(
        part["text"]
        for part in parts
        if isinstance(part.get("text"), str) and not part.get("thought")
    )


def _user_content(parts: list[dict[str, Any]]) -> dict[str, Any]:
    return {"role": "user", "parts": parts}


class GeminiProvider:
    """Gemini implementation of :class:`Provider` over the generateContent REST call."""

    def __init__(self, config: GatewayConfig):
        self.config = config

    async def send_chat(
        self,
        history: list[dict[str, Any]],
        message: str,
        system_instruction: str | None = None,
    ) -> str:
        """Replay ``history``, append ``message`` as the new user turn, return the reply text."""
        logger.debug("Replaying %d chat turns", len(history))
        request_body: dict[str, Any] = {
            "contents": [*history, _user_content([{"text": message}])],
        }
        if system_instruction:
            request_body["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        response = await generate_content(self.config.chat_model, request_body, self.config)
        return response_text(response)

    async def generate_image(self, parts: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Run an image-capable generation and return every part of the first candidate."""
        request_body: dict[str, Any] = {
            "contents": [_user_content(parts)],
            "generationConfig": {"responseModalities": ["IMAGE", "TEXT"]},
        }
        response = await generate_content(self.config.image_model, request_body, self.config)
        return first_candidate_parts(response)

    async def generate_json(self, prompt: str, schema: dict[str, Any]) -> str:
        """Request a completion constrained to ``schema`` and return its raw JSON text."""
        request_body: dict[str, Any] = {
            "contents": [_user_content([{"text": prompt}])],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }
        response = await generate_content(self.config.text_model, request_body, self.config)
        return response_text(response)

    async def generate_text(self, parts: list[dict[str, Any]]) -> str:
        request_body: dict[str, Any] = {"contents": [_user_content(parts)]}
        response = await generate_content(self.config.text_model, request_body, self.config)
        return response_text(response)

"""Task handlers: one async function per envelope task kind.

Each handler validates its payload, builds the prompt, makes exactly one
provider call and returns the JSON-ready success body. Handlers never catch
exceptions; the router turns them into the error envelope.
"""

import json
import logging
from typing import Any

from neuralpay_gateway.core.models import (
    AnalysisResult,
    AudioTranscribePayload,
    ChatPayload,
    CodeAssistPayload,
    DataAnalysisPayload,
    ImageEditPayload,
    ImageEditResult,
    InlineData,
    TextResult,
    TranslatePayload,
)
from neuralpay_gateway.core.provider import Provider

logger = logging.getLogger(__name__)

CHAT_SYSTEM_INSTRUCTION = (
    "You are a helpful and friendly AI assistant for NeuralPay, a platform that provides "
    "AI services through crypto payments. Keep your answers concise and friendly."
)

TRANSCRIBE_INSTRUCTION = "Transcribe this audio file."

TRANSLATE_PROMPT = (
    "Translate the following text from {source} to {target}. Provide only the translated text, "
    'without any additional explanations or context. The text is: "{text}"'
)

CODE_ASSIST_PROMPT = (
    "You are an expert programmer. Your task is to act as a code assistant. "
    'The user is working with {language}. The user\'s request is: "{description}". '
    "Provide only the code block as a response, without any additional explanations, "
    "introductions, or markdown formatting like ```{fence}\n. Just the raw code."
)

# The provider is asked to invent a plausible dataset and analyze that; no real data is sent.
DATA_ANALYSIS_PROMPT = (
    "Du bist ein erfahrener Datenanalyst. Basierend auf der folgenden Beschreibung, generiere "
    "ein plausibles, fiktives Datenset in deinem Gedächtnis (zeige es nicht an). Analysiere "
    "dieses Datenset und gib einen Titel, eine Zusammenfassung, 3-5 Schlüsselerkenntnisse und "
    '2-3 Handlungsempfehlungen zurück. Die Beschreibung des Nutzers ist: "{description}". '
    "Formatiere deine Antwort ausschließlich als JSON gemäß dem vorgegebenen Schema."
)

ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {
            "type": "STRING",
            "description": "Ein kurzer, prägnanter Titel für die Analyse.",
        },
        "summary": {
            "type": "STRING",
            "description": "Eine Zusammenfassung der Analyse in 2-3 Sätzen.",
        },
        "key_insights": {
            "type": "ARRAY",
            "description": "Eine Liste von 3-5 wichtigen Erkenntnissen aus den Daten.",
            "items": {"type": "STRING"},
        },
        "recommendations": {
            "type": "ARRAY",
            "description": "Eine Liste von 2-3 umsetzbaren Empfehlungen basierend auf der Analyse.",
            "items": {"type": "STRING"},
        },
    },
    "required": ["title", "summary", "key_insights", "recommendations"],
    "propertyOrdering": ["title", "summary", "key_insights", "recommendations"],
}


def build_translate_prompt(payload: TranslatePayload) -> str:
    return TRANSLATE_PROMPT.format(source=payload.source, target=payload.target, text=payload.text)


def build_code_assist_prompt(payload: CodeAssistPayload) -> str:
    return CODE_ASSIST_PROMPT.format(
        language=payload.language,
        description=payload.description,
        fence=payload.language.lower(),
    )


def build_data_analysis_prompt(payload: DataAnalysisPayload) -> str:
    return DATA_ANALYSIS_PROMPT.format(description=payload.description)


def select_first_image(parts: list[dict[str, Any]]) -> InlineData | None:
    """Return the first part carrying inline binary data, or None if there is none."""
    for part in parts:
        inline = part.get("inlineData")
        if inline:
            return InlineData.model_validate(inline)
    return None


async def run_chat(payload: Any, provider: Provider) -> dict[str, Any]:
    """Send one chat turn; the client resends the full history every time."""
    chat = ChatPayload.model_validate(payload)
    history = [turn.model_dump() for turn in chat.history]
    text = await provider.send_chat(history, chat.message, CHAT_SYSTEM_INSTRUCTION)
    return TextResult(text=text).model_dump()


async def run_image_edit(payload: Any, provider: Provider) -> dict[str, Any]:
    """Edit an uploaded image according to the prompt; image is None if the provider sent none back."""
    request = ImageEditPayload.model_validate(payload)
    parts = [request.image.to_part()]
    if request.prompt is not None:
        parts.append({"text": request.prompt})

    response_parts = await provider.generate_image(parts)
    image = select_first_image(response_parts)
    if image is None:
        logger.info("Image edit response carried no inline image")
    return ImageEditResult(image=image).model_dump()


async def run_data_analysis(payload: Any, provider: Provider) -> dict[str, Any]:
    request = DataAnalysisPayload.model_validate(payload)
    raw = await provider.generate_json(build_data_analysis_prompt(request), ANALYSIS_SCHEMA)
    return AnalysisResult.model_validate(json.loads(raw)).model_dump()


async def run_translate(payload: Any, provider: Provider) -> dict[str, Any]:
    request = TranslatePayload.model_validate(payload)
    text = await provider.generate_text([{"text": build_translate_prompt(request)}])
    return TextResult(text=text).model_dump()


async def run_audio_transcribe(payload: Any, provider: Provider) -> dict[str, Any]:
    request = AudioTranscribePayload.model_validate(payload)
    text = await provider.generate_text([request.audio.to_part(), {"text": TRANSCRIBE_INSTRUCTION}])
    return TextResult(text=text).model_dump()


async def run_code_assist(payload: Any, provider: Provider) -> dict[str, Any]:
    request = CodeAssistPayload.model_validate(payload)
    text = await provider.generate_text([{"text": build_code_assist_prompt(request)}])
    return TextResult(text=text).model_dump()

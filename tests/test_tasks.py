"""Tests for the individual task handlers."""

import json

import pytest
from pydantic import ValidationError

from neuralpay_gateway.core.tasks import (
    ANALYSIS_SCHEMA,
    CHAT_SYSTEM_INSTRUCTION,
    TRANSCRIBE_INSTRUCTION,
    run_audio_transcribe,
    run_chat,
    run_code_assist,
    run_data_analysis,
    run_image_edit,
    run_translate,
    select_first_image,
)
from tests.conftest import FakeProvider

IMAGE = {"mimeType": "image/png", "data": "iVBORw0KGgo="}
AUDIO = {"mimeType": "audio/webm", "data": "GkXfo59ChoEBQveBAULygQRC"}

ANALYSIS = {
    "title": "Umsatzanalyse Q3",
    "summary": "Der Umsatz stieg deutlich. Die Kosten blieben stabil.",
    "key_insights": ["Online wächst", "Filialen stagnieren", "Marge steigt"],
    "recommendations": ["Online ausbauen", "Filialen prüfen"],
}


# --- chat ---


@pytest.mark.asyncio
async def test_chat_replays_history(provider):
    payload = {
        "history": [
            {"role": "user", "parts": [{"text": "Was ist NeuralPay?"}]},
            {"role": "model", "parts": [{"text": "Eine Plattform."}]},
        ],
        "message": "Wie bezahle ich?",
    }

    body = await run_chat(payload, provider)

    assert body == {"text": "Hallo"}
    name, (history, message, system_instruction) = provider.calls[0]
    assert name == "send_chat"
    assert history == payload["history"]
    assert message == "Wie bezahle ich?"
    assert system_instruction == CHAT_SYSTEM_INSTRUCTION


@pytest.mark.asyncio
async def test_chat_history_defaults_to_empty(provider):
    await run_chat({"message": "Hi"}, provider)
    assert provider.calls[0][1][0] == []


@pytest.mark.asyncio
async def test_chat_rejects_unknown_role(provider):
    payload = {"history": [{"role": "system", "parts": [{"text": "x"}]}], "message": "Hi"}
    with pytest.raises(ValidationError):
        await run_chat(payload, provider)
    assert provider.calls == []


# --- image-edit ---


def test_select_first_image_picks_first_inline_part():
    parts = [
        {"text": "Here is your image"},
        {"inlineData": {"mimeType": "image/png", "data": "FIRST"}},
        {"inlineData": {"mimeType": "image/jpeg", "data": "SECOND"}},
    ]
    image = select_first_image(parts)
    assert image.mimeType == "image/png"
    assert image.data == "FIRST"


def test_select_first_image_none_when_missing():
    assert select_first_image([{"text": "Sorry, no image"}]) is None
    assert select_first_image([]) is None


@pytest.mark.asyncio
async def test_image_edit_returns_first_image():
    provider = FakeProvider(
        image_parts=[
            {"text": "Done"},
            {"inlineData": {"mimeType": "image/png", "data": "RESULT"}},
            {"inlineData": {"mimeType": "image/png", "data": "IGNORED"}},
        ]
    )

    body = await run_image_edit({"image": IMAGE, "prompt": "Add a hat"}, provider)

    assert body == {"image": {"mimeType": "image/png", "data": "RESULT"}}
    name, (parts,) = provider.calls[0]
    assert name == "generate_image"
    assert parts == [{"inlineData": IMAGE}, {"text": "Add a hat"}]


@pytest.mark.asyncio
async def test_image_edit_without_inline_image_returns_null():
    provider = FakeProvider(image_parts=[{"text": "I cannot edit this image."}])
    body = await run_image_edit({"image": IMAGE, "prompt": "Add a hat"}, provider)
    assert body == {"image": None}


@pytest.mark.asyncio
async def test_image_edit_accepts_inline_data_key(provider):
    await run_image_edit({"inlineData": IMAGE, "prompt": "Crop"}, provider)
    assert provider.calls[0][1][0][0] == {"inlineData": IMAGE}


@pytest.mark.asyncio
async def test_image_edit_without_prompt_sends_image_only(provider):
    await run_image_edit({"image": IMAGE}, provider)
    assert provider.calls[0][1][0] == [{"inlineData": IMAGE}]


@pytest.mark.asyncio
async def test_image_edit_requires_mime_type(provider):
    with pytest.raises(ValidationError):
        await run_image_edit({"image": {"mimeType": "", "data": "AAAA"}, "prompt": "x"}, provider)


# --- data-analysis ---


@pytest.mark.asyncio
async def test_data_analysis_parses_schema_result():
    provider = FakeProvider(json_text=json.dumps(ANALYSIS))

    body = await run_data_analysis({"description": "Verkaufszahlen eines Online-Shops"}, provider)

    assert set(body) == {"title", "summary", "key_insights", "recommendations"}
    assert body["key_insights"] == ANALYSIS["key_insights"]
    assert body["recommendations"] == ANALYSIS["recommendations"]

    name, (prompt, schema) = provider.calls[0]
    assert name == "generate_json"
    assert schema is ANALYSIS_SCHEMA
    assert '"Verkaufszahlen eines Online-Shops"' in prompt
    assert "fiktives Datenset" in prompt


@pytest.mark.asyncio
async def test_data_analysis_drops_extra_fields():
    provider = FakeProvider(json_text=json.dumps({**ANALYSIS, "dataset": [1, 2, 3]}))
    body = await run_data_analysis({"description": "x"}, provider)
    assert set(body) == {"title", "summary", "key_insights", "recommendations"}


@pytest.mark.asyncio
async def test_data_analysis_invalid_json_raises():
    provider = FakeProvider(json_text="not json")
    with pytest.raises(json.JSONDecodeError):
        await run_data_analysis({"description": "x"}, provider)


def test_analysis_schema_covers_result_fields():
    assert set(ANALYSIS_SCHEMA["properties"]) == {"title", "summary", "key_insights", "recommendations"}
    assert ANALYSIS_SCHEMA["properties"]["key_insights"]["items"] == {"type": "STRING"}


# --- translate ---


@pytest.mark.asyncio
async def test_translate_builds_prompt(provider):
    body = await run_translate({"text": "Hello", "from": "English", "to": "German"}, provider)

    assert body == {"text": "Hallo"}
    name, (parts,) = provider.calls[0]
    assert name == "generate_text"
    assert parts == [
        {
            "text": "Translate the following text from English to German. Provide only the translated "
            "text, without any additional explanations or context. The text is: \"Hello\""
        }
    ]


@pytest.mark.asyncio
async def test_translate_requires_languages(provider):
    with pytest.raises(ValidationError):
        await run_translate({"text": "Hello"}, provider)


# --- audio-transcribe ---


@pytest.mark.asyncio
async def test_audio_transcribe_sends_audio_and_instruction():
    provider = FakeProvider(text="Guten Morgen")

    body = await run_audio_transcribe({"audio": AUDIO}, provider)

    assert body == {"text": "Guten Morgen"}
    name, (parts,) = provider.calls[0]
    assert name == "generate_text"
    assert parts == [{"inlineData": AUDIO}, {"text": TRANSCRIBE_INSTRUCTION}]
    assert TRANSCRIBE_INSTRUCTION == "Transcribe this audio file."


@pytest.mark.asyncio
async def test_audio_transcribe_ignores_client_prompt(provider):
    await run_audio_transcribe({"audio": AUDIO, "prompt": "Summarize instead"}, provider)

    parts = provider.calls[0][1][0]
    assert parts == [{"inlineData": AUDIO}, {"text": TRANSCRIBE_INSTRUCTION}]


@pytest.mark.asyncio
async def test_audio_transcribe_missing_audio(provider):
    with pytest.raises(ValidationError):
        await run_audio_transcribe({}, provider)


# --- code-assist ---


@pytest.mark.asyncio
async def test_code_assist_asks_for_raw_code():
    provider = FakeProvider(text="print('hi')")

    body = await run_code_assist({"description": "print hi", "language": "Python"}, provider)

    assert body == {"text": "print('hi')"}
    prompt = provider.calls[0][1][0][0]["text"]
    assert "The user is working with Python." in prompt
    assert 'The user\'s request is: "print hi".' in prompt
    assert "```python\n. Just the raw code." in prompt


# --- payload shape ---


@pytest.mark.asyncio
async def test_missing_payload_raises(provider):
    with pytest.raises(ValidationError):
        await run_code_assist(None, provider)

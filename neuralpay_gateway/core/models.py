"""Payload and result models for the six envelope tasks."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TextPart(BaseModel):
    """One text part of a conversation turn."""

    text: str


class ChatTurn(BaseModel):
    """A prior conversation turn replayed from the client."""

    role: Literal["user", "model"]
    parts: list[TextPart]


class ChatPayload(BaseModel):
    """Payload for the chat task. The client owns the whole history."""

    history: list[ChatTurn] = Field(default_factory=list)
    message: str


class InlineData(BaseModel):
    """A base64-encoded binary blob with its MIME type."""

    mimeType: str = Field(min_length=1)
    data: str

    def to_part(self) -> dict:
        return {"inlineData": {"mimeType": self.mimeType, "data": self.data}}


class ImageEditPayload(BaseModel):
    """Payload for the image-edit task."""

    image: InlineData = Field(validation_alias=AliasChoices("image", "inlineData"))
    prompt: str | None = None


class AudioTranscribePayload(BaseModel):
    """Payload for the audio-transcribe task."""

    audio: InlineData = Field(validation_alias=AliasChoices("audio", "inlineData"))


class DataAnalysisPayload(BaseModel):
    """Payload for the data-analysis task."""

    description: str


class TranslatePayload(BaseModel):
    """Payload for the translate task. Languages are display names, not codes."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    source: str = Field(alias="from")
    target: str = Field(alias="to")


class CodeAssistPayload(BaseModel):
    """Payload for the code-assist task."""

    description: str
    language: str


class AnalysisResult(BaseModel):
    """Structured answer of the data-analysis task."""

    model_config = ConfigDict(extra="ignore")

    title: str
    summary: str
    key_insights: list[str]
    recommendations: list[str]


class TextResult(BaseModel):
    """Success body for the chat, translate, audio-transcribe and code-assist tasks."""

    text: str


class ImageEditResult(BaseModel):
    """Success body for the image-edit task; image is None when nothing came back."""

    image: InlineData | None = None

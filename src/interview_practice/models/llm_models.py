"""
LLM-specific data models for request/response cycle.

These models are internal to the LLM layer and handle the raw communication
with the generative-language endpoint. They are separate from the business
models (ProblemSpec) so the use-case layer never sees provider payloads.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TextPart(BaseModel):
    """Plain text prompt part."""
    model_config = ConfigDict(frozen=True)

    text: str


class InlineDataPart(BaseModel):
    """Binary content sent inline as base64 (audio for transcription)."""
    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(..., description="e.g. 'audio/wav'")
    data: str = Field(..., description="Base64-encoded payload")


ContentPart = Union[TextPart, InlineDataPart]


class LLMGenerationRequest(BaseModel):
    """
    Internal request model for LLM generation.

    Mirrors a single-turn generateContent call: one content entry with an
    ordered list of parts plus optional generation config.
    """
    model_config = ConfigDict(frozen=True)

    parts: list[ContentPart] = Field(..., min_length=1)
    max_output_tokens: Optional[int] = Field(default=None, ge=1, le=8192)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)

    def to_payload(self) -> Dict[str, Any]:
        """Render the generateContent JSON body."""
        parts: list[Dict[str, Any]] = []
        for part in self.parts:
            if isinstance(part, TextPart):
                parts.append({"text": part.text})
            else:
                parts.append({"inline_data": {"mime_type": part.mime_type, "data": part.data}})

        payload: Dict[str, Any] = {"contents": [{"parts": parts}]}

        generation_config: Dict[str, Any] = {}
        if self.max_output_tokens is not None:
            generation_config["maxOutputTokens"] = self.max_output_tokens
        if self.temperature is not None:
            generation_config["temperature"] = self.temperature
        if generation_config:
            payload["generationConfig"] = generation_config

        return payload


class LLMGenerationResponse(BaseModel):
    """
    Internal response model from LLM generation.

    Contains the generated text plus metadata for logging.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text of the first candidate")
    model: str = Field(..., description="Model that served the request")
    finish_reason: Optional[str] = Field(default=None, description="STOP, MAX_TOKENS, SAFETY, ...")
    prompt_tokens: Optional[int] = Field(default=None)
    completion_tokens: Optional[int] = Field(default=None)
    latency_ms: int = Field(..., ge=0)

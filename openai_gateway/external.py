"""Wire-shaped models for the OpenAI REST endpoints used by the brokers."""

from pydantic import BaseModel, ConfigDict


class ExternalModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ExternalImageGenerationRequest(ExternalModel):
    prompt: str
    n: int
    size: str
    response_format: str
    model: str | None = None
    user: str | None = None


class ExternalImageData(ExternalModel):
    url: str | None = None
    b64_json: str | None = None
    revised_prompt: str | None = None


class ExternalImageGenerationResponse(ExternalModel):
    created: int
    data: list[ExternalImageData] | None = None


class ExternalChatMessage(ExternalModel):
    role: str
    content: str | None = None


class ExternalChatCompletionRequest(ExternalModel):
    model: str
    messages: list[ExternalChatMessage]
    temperature: float | None = None
    max_tokens: int | None = None
    user: str | None = None


class ExternalChatChoice(ExternalModel):
    index: int
    message: ExternalChatMessage
    finish_reason: str | None = None


class ExternalChatUsage(ExternalModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ExternalChatCompletionResponse(ExternalModel):
    id: str
    created: int
    model: str
    choices: list[ExternalChatChoice] = []
    usage: ExternalChatUsage | None = None

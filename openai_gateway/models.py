"""Domain records exchanged with the gateway services.

Fields are optional at construction time; the service validators decide what
is required so that every missing field can be reported at once.
"""

from dataclasses import dataclass
from datetime import datetime

from .constants import DEFAULT_IMAGE_COUNT, DEFAULT_IMAGE_RESPONSE_FORMAT, DEFAULT_IMAGE_SIZE


@dataclass(frozen=True)
class ImageGenerationRequest:
    prompt: str | None = None
    image_count: int | None = DEFAULT_IMAGE_COUNT
    image_size: str | None = DEFAULT_IMAGE_SIZE
    response_format: str | None = DEFAULT_IMAGE_RESPONSE_FORMAT
    model: str | None = None
    user: str | None = None


@dataclass(frozen=True)
class ImageGenerationResult:
    url: str | None = None
    base64_image: str | None = None
    revised_prompt: str | None = None


@dataclass(frozen=True)
class ImageGenerationResponse:
    created_at: datetime
    results: tuple[ImageGenerationResult, ...] = ()


@dataclass(frozen=True)
class ImageGeneration:
    request: ImageGenerationRequest | None
    response: ImageGenerationResponse | None = None


@dataclass(frozen=True)
class ChatCompletionMessage:
    role: str | None = None
    content: str | None = None


@dataclass(frozen=True)
class ChatCompletionRequest:
    model: str | None = None
    messages: tuple[ChatCompletionMessage, ...] = ()
    temperature: float | None = None
    max_tokens: int | None = None
    user: str | None = None


@dataclass(frozen=True)
class ChatCompletionChoice:
    index: int
    message: ChatCompletionMessage
    finish_reason: str | None = None


@dataclass(frozen=True)
class ChatCompletionUsage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class ChatCompletionResponse:
    id: str
    model: str
    created_at: datetime
    choices: tuple[ChatCompletionChoice, ...] = ()
    usage: ChatCompletionUsage | None = None


@dataclass(frozen=True)
class ChatCompletion:
    request: ChatCompletionRequest | None
    response: ChatCompletionResponse | None = None

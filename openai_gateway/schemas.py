"""Pydantic schemas for the gateway HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_IMAGE_COUNT, DEFAULT_IMAGE_RESPONSE_FORMAT, DEFAULT_IMAGE_SIZE
from .models import (
    ChatCompletion,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ImageGeneration,
    ImageGenerationRequest,
)


class ImageGenerationPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str | None = None
    image_count: int | None = Field(default=DEFAULT_IMAGE_COUNT, alias="imageCount")
    image_size: str | None = Field(default=DEFAULT_IMAGE_SIZE, alias="imageSize")
    response_format: str | None = Field(
        default=DEFAULT_IMAGE_RESPONSE_FORMAT, alias="responseFormat"
    )
    model: str | None = None
    user: str | None = None

    def to_domain(self) -> ImageGeneration:
        return ImageGeneration(
            request=ImageGenerationRequest(
                prompt=self.prompt,
                image_count=self.image_count,
                image_size=self.image_size,
                response_format=self.response_format,
                model=self.model,
                user=self.user,
            )
        )


class ImageResultPayload(BaseModel):
    url: str | None = None
    base64_image: str | None = Field(default=None, serialization_alias="base64Image")
    revised_prompt: str | None = Field(default=None, serialization_alias="revisedPrompt")


class ImageGenerationResponsePayload(BaseModel):
    created_at: datetime = Field(serialization_alias="createdAt")
    results: list[ImageResultPayload]

    @classmethod
    def from_domain(cls, image_generation: ImageGeneration) -> "ImageGenerationResponsePayload":
        response = image_generation.response
        return cls(
            created_at=response.created_at,
            results=[
                ImageResultPayload(
                    url=result.url,
                    base64_image=result.base64_image,
                    revised_prompt=result.revised_prompt,
                )
                for result in response.results
            ],
        )


class ChatMessagePayload(BaseModel):
    role: str | None = None
    content: str | None = None


class ChatCompletionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    model: str | None = None
    messages: list[ChatMessagePayload] = Field(default_factory=list)
    temperature: float | None = None
    max_tokens: int | None = Field(default=None, alias="maxTokens")
    user: str | None = None

    def to_domain(self) -> ChatCompletion:
        return ChatCompletion(
            request=ChatCompletionRequest(
                model=self.model,
                messages=tuple(
                    ChatCompletionMessage(role=message.role, content=message.content)
                    for message in self.messages
                ),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                user=self.user,
            )
        )


class ChatChoicePayload(BaseModel):
    index: int
    message: ChatMessagePayload
    finish_reason: str | None = Field(default=None, serialization_alias="finishReason")


class ChatUsagePayload(BaseModel):
    prompt_tokens: int = Field(serialization_alias="promptTokens")
    completion_tokens: int = Field(serialization_alias="completionTokens")
    total_tokens: int = Field(serialization_alias="totalTokens")


class ChatCompletionResponsePayload(BaseModel):
    id: str
    model: str
    created_at: datetime = Field(serialization_alias="createdAt")
    choices: list[ChatChoicePayload]
    usage: ChatUsagePayload | None = None

    @classmethod
    def from_domain(cls, chat_completion: ChatCompletion) -> "ChatCompletionResponsePayload":
        response = chat_completion.response
        usage = None
        if response.usage is not None:
            usage = ChatUsagePayload(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
        return cls(
            id=response.id,
            model=response.model,
            created_at=response.created_at,
            choices=[
                ChatChoicePayload(
                    index=choice.index,
                    message=ChatMessagePayload(
                        role=choice.message.role, content=choice.message.content
                    ),
                    finish_reason=choice.finish_reason,
                )
                for choice in response.choices
            ],
            usage=usage,
        )

"""Conversion helpers between domain records and OpenAI wire models."""

from datetime import datetime, timezone

from .external import (
    ExternalChatCompletionRequest,
    ExternalChatCompletionResponse,
    ExternalChatMessage,
    ExternalImageGenerationRequest,
    ExternalImageGenerationResponse,
)
from .models import (
    ChatCompletion,
    ChatCompletionChoice,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatCompletionUsage,
    ImageGeneration,
    ImageGenerationRequest,
    ImageGenerationResponse,
    ImageGenerationResult,
)


def _from_unix_seconds(value: int) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


def to_external_image_generation_request(
    request: ImageGenerationRequest,
) -> ExternalImageGenerationRequest:
    """Build the wire request from a validated domain request."""
    return ExternalImageGenerationRequest(
        prompt=request.prompt,
        n=request.image_count,
        size=request.image_size,
        response_format=request.response_format,
        model=request.model,
        user=request.user,
    )


def to_image_generation(
    request: ImageGenerationRequest,
    external_response: ExternalImageGenerationResponse,
) -> ImageGeneration:
    results = tuple(
        ImageGenerationResult(
            url=data.url,
            base64_image=data.b64_json,
            revised_prompt=data.revised_prompt,
        )
        for data in external_response.data or ()
    )
    return ImageGeneration(
        request=request,
        response=ImageGenerationResponse(
            created_at=_from_unix_seconds(external_response.created),
            results=results,
        ),
    )


def to_external_chat_completion_request(
    request: ChatCompletionRequest,
) -> ExternalChatCompletionRequest:
    """Build the wire request from a validated domain request."""
    return ExternalChatCompletionRequest(
        model=request.model,
        messages=[
            ExternalChatMessage(role=message.role, content=message.content)
            for message in request.messages
        ],
        temperature=request.temperature,
        max_tokens=request.max_tokens,
        user=request.user,
    )


def to_chat_completion(
    request: ChatCompletionRequest,
    external_response: ExternalChatCompletionResponse,
) -> ChatCompletion:
    usage = None
    if external_response.usage is not None:
        usage = ChatCompletionUsage(
            prompt_tokens=external_response.usage.prompt_tokens,
            completion_tokens=external_response.usage.completion_tokens,
            total_tokens=external_response.usage.total_tokens,
        )

    choices = tuple(
        ChatCompletionChoice(
            index=choice.index,
            message=ChatCompletionMessage(
                role=choice.message.role,
                content=choice.message.content,
            ),
            finish_reason=choice.finish_reason,
        )
        for choice in external_response.choices
    )
    return ChatCompletion(
        request=request,
        response=ChatCompletionResponse(
            id=external_response.id,
            model=external_response.model,
            created_at=_from_unix_seconds(external_response.created),
            choices=choices,
            usage=usage,
        ),
    )

"""Shared test doubles and builders for gateway tests."""

import httpx
import openai

from openai_gateway.external import (
    ExternalChatChoice,
    ExternalChatCompletionRequest,
    ExternalChatCompletionResponse,
    ExternalChatMessage,
    ExternalChatUsage,
    ExternalImageData,
    ExternalImageGenerationRequest,
    ExternalImageGenerationResponse,
)
from openai_gateway.models import (
    ChatCompletion,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ImageGeneration,
    ImageGenerationRequest,
)

OPENAI_URL = "https://api.openai.com/v1/images/generations"
CREATED_AT_UNIX_SECONDS = 1_700_000_000


def make_http_request() -> httpx.Request:
    return httpx.Request("POST", OPENAI_URL)


def make_status_error(status_code: int) -> openai.APIStatusError:
    request = make_http_request()
    response = httpx.Response(status_code, request=request)
    return openai.APIStatusError(f"Error code: {status_code}", response=response, body=None)


def make_connection_error() -> openai.APIConnectionError:
    return openai.APIConnectionError(request=make_http_request())


def make_timeout_error() -> openai.APITimeoutError:
    return openai.APITimeoutError(make_http_request())


def create_image_generation() -> ImageGeneration:
    return ImageGeneration(
        request=ImageGenerationRequest(
            prompt="a lighthouse at dawn, watercolor",
            image_count=2,
            image_size="512x512",
            response_format="url",
            user="user-42",
        )
    )


def create_external_image_response(*urls: str) -> ExternalImageGenerationResponse:
    return ExternalImageGenerationResponse(
        created=CREATED_AT_UNIX_SECONDS,
        data=[ExternalImageData(url=url) for url in urls],
    )


def create_chat_completion() -> ChatCompletion:
    return ChatCompletion(
        request=ChatCompletionRequest(
            model="gpt-4.1-mini",
            messages=(
                ChatCompletionMessage(role="system", content="You are terse."),
                ChatCompletionMessage(role="user", content="hello"),
            ),
            temperature=0.2,
        )
    )


def create_external_chat_response(*contents: str) -> ExternalChatCompletionResponse:
    return ExternalChatCompletionResponse(
        id="chatcmpl-123",
        created=CREATED_AT_UNIX_SECONDS,
        model="gpt-4.1-mini",
        choices=[
            ExternalChatChoice(
                index=index,
                message=ExternalChatMessage(role="assistant", content=content),
                finish_reason="stop",
            )
            for index, content in enumerate(contents)
        ],
        usage=ExternalChatUsage(prompt_tokens=12, completion_tokens=3, total_tokens=15),
    )


class RecordingBroker:
    """Broker double recording every call; raises ``error`` when given one."""

    def __init__(
        self,
        image_response: ExternalImageGenerationResponse | None = None,
        chat_response: ExternalChatCompletionResponse | None = None,
        error: BaseException | None = None,
    ) -> None:
        self._image_response = image_response
        self._chat_response = chat_response
        self._error = error
        self.calls: list[tuple[str, object]] = []

    async def post_image_generation_request(
        self, request: ExternalImageGenerationRequest
    ) -> ExternalImageGenerationResponse:
        self.calls.append(("post_image_generation_request", request))
        if self._error is not None:
            raise self._error
        return self._image_response

    async def post_chat_completion_request(
        self, request: ExternalChatCompletionRequest
    ) -> ExternalChatCompletionResponse:
        self.calls.append(("post_chat_completion_request", request))
        if self._error is not None:
            raise self._error
        return self._chat_response

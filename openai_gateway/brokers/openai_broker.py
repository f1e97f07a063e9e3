"""OpenAI SDK broker implementation."""

import logging
import time
from collections.abc import Callable
from typing import Any

from langsmith import traceable
from openai import AsyncOpenAI

from openai_gateway.external import (
    ExternalChatCompletionRequest,
    ExternalChatCompletionResponse,
    ExternalImageGenerationRequest,
    ExternalImageGenerationResponse,
)

logger = logging.getLogger(__name__)


@traceable(run_type="tool", name="openai.images.generate")
async def _generate_images(client: AsyncOpenAI, request_params: dict[str, Any]) -> Any:
    return await client.images.generate(**request_params)


@traceable(run_type="llm", name="openai.chat.completions.create")
async def _create_chat_completion(client: AsyncOpenAI, request_params: dict[str, Any]) -> Any:
    return await client.chat.completions.create(**request_params)


class AsyncOpenAIBroker:
    def __init__(self, get_openai_client: Callable[[], AsyncOpenAI]) -> None:
        self._get_openai_client = get_openai_client

    async def post_image_generation_request(
        self, request: ExternalImageGenerationRequest
    ) -> ExternalImageGenerationResponse:
        request_params = request.model_dump(exclude_none=True)
        client = self._get_openai_client()

        start = time.time()
        response = await _generate_images(client, request_params)
        duration_ms = int((time.time() - start) * 1000)

        external_response = ExternalImageGenerationResponse.model_validate(response.model_dump())
        logger.info(
            "Image generation response received",
            extra={
                "openai_duration_ms": duration_ms,
                "model": request.model,
                "image_count": len(external_response.data or ()),
            },
        )
        return external_response

    async def post_chat_completion_request(
        self, request: ExternalChatCompletionRequest
    ) -> ExternalChatCompletionResponse:
        request_params = request.model_dump(exclude_none=True)
        client = self._get_openai_client()

        start = time.time()
        response = await _create_chat_completion(client, request_params)
        duration_ms = int((time.time() - start) * 1000)

        external_response = ExternalChatCompletionResponse.model_validate(response.model_dump())
        usage = external_response.usage
        logger.info(
            "Chat completion response received",
            extra={
                "openai_duration_ms": duration_ms,
                "model": external_response.model,
                "usage_prompt_tokens": usage.prompt_tokens if usage else None,
                "usage_completion_tokens": usage.completion_tokens if usage else None,
                "response_id": external_response.id,
            },
        )
        return external_response

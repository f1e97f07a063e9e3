"""Broker interface between the gateway services and the OpenAI API."""

from typing import Protocol

from openai_gateway.external import (
    ExternalChatCompletionRequest,
    ExternalChatCompletionResponse,
    ExternalImageGenerationRequest,
    ExternalImageGenerationResponse,
)


class OpenAIBroker(Protocol):
    async def post_image_generation_request(
        self, request: ExternalImageGenerationRequest
    ) -> ExternalImageGenerationResponse:
        """Send one image generation request; transport failures propagate unchanged."""
        ...

    async def post_chat_completion_request(
        self, request: ExternalChatCompletionRequest
    ) -> ExternalChatCompletionResponse:
        """Send one chat completion request; transport failures propagate unchanged."""
        ...

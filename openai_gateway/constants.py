"""Shared constants and literal types for the OpenAI gateway."""

from typing import Literal

OPENAI_API_KEY_PARAMETER_NAME = "/openai-gateway/openai-api-key"
OPENAI_ORGANIZATION_PARAMETER_NAME = "/openai-gateway/openai-organization"
LANGSMITH_API_KEY_PARAMETER_NAME = "/openai-gateway/langsmith-api-key"
AWS_REGION = "ap-northeast-1"
LANGSMITH_PROJECT = "openai-gateway"

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_REQUEST_TIMEOUT_SECONDS = 60.0
# Failures are classified once and surfaced; the SDK must not retry either.
OPENAI_MAX_RETRIES = 0

DEFAULT_IMAGE_SIZE = "1024x1024"
DEFAULT_IMAGE_RESPONSE_FORMAT = "url"
DEFAULT_IMAGE_COUNT = 1

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

IMAGE_GENERATION_ENTITY = "image generation"
CHAT_COMPLETION_ENTITY = "chat completion"

ImageSize = Literal["256x256", "512x512", "1024x1024", "1792x1024", "1024x1792"]
ImageResponseFormat = Literal["url", "b64_json"]
ChatRole = Literal["system", "user", "assistant", "tool"]

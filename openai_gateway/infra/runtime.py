"""Runtime infrastructure helpers for credentials, tracing, and service wiring."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import boto3
from langsmith.run_trees import get_cached_client
from openai import AsyncOpenAI

from openai_gateway.brokers.openai_broker import AsyncOpenAIBroker
from openai_gateway.constants import (
    AWS_REGION,
    DEFAULT_OPENAI_BASE_URL,
    LANGSMITH_API_KEY_PARAMETER_NAME,
    LANGSMITH_PROJECT,
    OPENAI_API_KEY_PARAMETER_NAME,
    OPENAI_MAX_RETRIES,
    OPENAI_ORGANIZATION_PARAMETER_NAME,
    OPENAI_REQUEST_TIMEOUT_SECONDS,
)
from openai_gateway.services.chat_completion_service import ChatCompletionService
from openai_gateway.services.image_generation_service import ImageGenerationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiCredentials:
    openai_api_key: str
    openai_organization: str | None
    langsmith_api_key: str | None


def _get_secure_parameter(ssm_client: Any, parameter_name: str) -> str:
    result = ssm_client.get_parameter(Name=parameter_name, WithDecryption=True)
    value = result["Parameter"].get("Value")
    if not value:
        raise RuntimeError(f"SSM parameter {parameter_name} has no value")
    return value


def _get_optional_secure_parameter(ssm_client: Any, parameter_name: str) -> str | None:
    try:
        return _get_secure_parameter(ssm_client, parameter_name)
    except Exception:
        logger.warning(
            "Optional SSM parameter is unavailable; disabling dependent feature",
            extra={"parameter_name": parameter_name},
            exc_info=True,
        )
        return None


@lru_cache(maxsize=1)
def get_api_credentials() -> ApiCredentials:
    """Resolve credentials from the environment, falling back to SSM Parameter Store."""
    openai_api_key = os.environ.get("OPENAI_API_KEY")
    if openai_api_key:
        return ApiCredentials(
            openai_api_key=openai_api_key,
            openai_organization=os.environ.get("OPENAI_ORGANIZATION") or None,
            langsmith_api_key=os.environ.get("LANGSMITH_API_KEY") or None,
        )

    ssm_client = boto3.client("ssm", region_name=AWS_REGION)
    return ApiCredentials(
        openai_api_key=_get_secure_parameter(ssm_client, OPENAI_API_KEY_PARAMETER_NAME),
        openai_organization=_get_optional_secure_parameter(
            ssm_client, OPENAI_ORGANIZATION_PARAMETER_NAME
        ),
        langsmith_api_key=_get_optional_secure_parameter(
            ssm_client, LANGSMITH_API_KEY_PARAMETER_NAME
        ),
    )


def _configure_langsmith(langsmith_api_key: str | None) -> None:
    if not langsmith_api_key:
        os.environ.pop("LANGSMITH_TRACING", None)
        os.environ.pop("LANGSMITH_API_KEY", None)
        logger.info("LangSmith tracing disabled because API key is unavailable")
        return

    os.environ["LANGSMITH_TRACING"] = "true"
    os.environ["LANGSMITH_API_KEY"] = langsmith_api_key
    os.environ.setdefault("LANGSMITH_PROJECT", LANGSMITH_PROJECT)


@lru_cache(maxsize=1)
def ensure_langsmith_configured() -> None:
    """Configure LangSmith environment variables (called once via lru_cache)."""
    credentials = get_api_credentials()
    _configure_langsmith(credentials.langsmith_api_key)


def flush_langsmith_traces() -> None:
    if os.environ.get("LANGSMITH_TRACING", "").lower() != "true":
        return
    if not os.environ.get("LANGSMITH_API_KEY"):
        return
    try:
        get_cached_client().flush()
    except Exception:
        logger.warning("Failed to flush LangSmith traces", exc_info=True)


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """Create the OpenAI client; retries are disabled so each call reaches the API once."""
    ensure_langsmith_configured()
    credentials = get_api_credentials()
    return AsyncOpenAI(
        api_key=credentials.openai_api_key,
        organization=credentials.openai_organization,
        base_url=os.environ.get("OPENAI_BASE_URL") or DEFAULT_OPENAI_BASE_URL,
        timeout=OPENAI_REQUEST_TIMEOUT_SECONDS,
        max_retries=OPENAI_MAX_RETRIES,
    )


@lru_cache(maxsize=1)
def get_openai_broker() -> AsyncOpenAIBroker:
    return AsyncOpenAIBroker(get_openai_client)


@lru_cache(maxsize=1)
def get_image_generation_service() -> ImageGenerationService:
    return ImageGenerationService(broker=get_openai_broker())


@lru_cache(maxsize=1)
def get_chat_completion_service() -> ChatCompletionService:
    return ChatCompletionService(broker=get_openai_broker())

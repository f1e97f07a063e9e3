"""Application service for chat completion requests."""

import logging
from typing import Any

from pydantic import Field

from openai_gateway.brokers.base import OpenAIBroker
from openai_gateway.constants import (
    CHAT_COMPLETION_ENTITY,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    ChatRole,
)
from openai_gateway.failures import classify_failure
from openai_gateway.mappers import to_chat_completion, to_external_chat_completion_request
from openai_gateway.models import ChatCompletion
from openai_gateway.validation import NonBlankText, RuleModel, validate

logger = logging.getLogger(__name__)


class ChatCompletionMessageRules(RuleModel):
    role: ChatRole
    content: NonBlankText


class ChatCompletionRequestRules(RuleModel):
    model: NonBlankText
    messages: list[ChatCompletionMessageRules] = Field(min_length=1)
    temperature: float | None = Field(default=None, ge=MIN_TEMPERATURE, le=MAX_TEMPERATURE)
    max_tokens: int | None = Field(default=None, ge=1)


class ChatCompletionRules(RuleModel):
    request: ChatCompletionRequestRules


class ChatCompletionResponseRules(RuleModel):
    id: NonBlankText
    choices: list[Any] = Field(min_length=1)


def validate_chat_completion_on_send(chat_completion: ChatCompletion | None) -> None:
    validate(CHAT_COMPLETION_ENTITY, ChatCompletionRules, chat_completion, "chat_completion")


def validate_sent_chat_completion(chat_completion: ChatCompletion) -> None:
    validate(CHAT_COMPLETION_ENTITY, ChatCompletionResponseRules, chat_completion.response, "response")


class ChatCompletionService:
    def __init__(self, broker: OpenAIBroker) -> None:
        self._broker = broker

    async def send_chat_completion(self, chat_completion: ChatCompletion) -> ChatCompletion:
        try:
            validate_chat_completion_on_send(chat_completion)
            request = chat_completion.request
            logger.info(
                "Chat completion request received",
                extra={"model": request.model, "message_count": len(request.messages)},
            )

            external_response = await self._broker.post_chat_completion_request(
                to_external_chat_completion_request(request)
            )
            sent = to_chat_completion(request, external_response)
            validate_sent_chat_completion(sent)
            return sent
        except Exception as error:
            raise classify_failure(error, CHAT_COMPLETION_ENTITY) from error

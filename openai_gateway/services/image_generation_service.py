"""Application service for image generation requests."""

import logging

from pydantic import Field, model_validator

from openai_gateway.brokers.base import OpenAIBroker
from openai_gateway.constants import IMAGE_GENERATION_ENTITY, ImageResponseFormat, ImageSize
from openai_gateway.failures import classify_failure
from openai_gateway.mappers import to_external_image_generation_request, to_image_generation
from openai_gateway.models import ImageGeneration
from openai_gateway.validation import NonBlankText, RuleModel, validate

logger = logging.getLogger(__name__)


class ImageGenerationRequestRules(RuleModel):
    prompt: NonBlankText
    image_count: int = Field(ge=1)
    image_size: ImageSize
    response_format: ImageResponseFormat


class ImageGenerationRules(RuleModel):
    request: ImageGenerationRequestRules


class ImageGenerationResultRules(RuleModel):
    url: str | None = None
    base64_image: str | None = None

    @model_validator(mode="after")
    def validate_image_present(self) -> "ImageGenerationResultRules":
        if not (self.url or self.base64_image):
            raise ValueError("Url or base64 image is required")
        return self


class ImageGenerationResponseRules(RuleModel):
    results: list[ImageGenerationResultRules] = Field(min_length=1)


def validate_image_generation_on_generate(image_generation: ImageGeneration | None) -> None:
    validate(IMAGE_GENERATION_ENTITY, ImageGenerationRules, image_generation, "image_generation")


def validate_generated_image_generation(image_generation: ImageGeneration) -> None:
    validate(
        IMAGE_GENERATION_ENTITY,
        ImageGenerationResponseRules,
        image_generation.response,
        "response",
    )


class ImageGenerationService:
    def __init__(self, broker: OpenAIBroker) -> None:
        self._broker = broker

    async def generate_image(self, image_generation: ImageGeneration) -> ImageGeneration:
        """Generate images for ``image_generation.request``.

        Raises one of the ``OpenAIGatewayError`` kinds on any failure, chained
        to the original exception. The broker is called at most once.
        """
        try:
            validate_image_generation_on_generate(image_generation)
            request = image_generation.request
            logger.info(
                "Image generation request received",
                extra={"image_count": request.image_count, "image_size": request.image_size},
            )

            external_response = await self._broker.post_image_generation_request(
                to_external_image_generation_request(request)
            )
            generated = to_image_generation(request, external_response)
            validate_generated_image_generation(generated)
            return generated
        except Exception as error:
            raise classify_failure(error, IMAGE_GENERATION_ENTITY) from error

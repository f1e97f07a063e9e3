import unittest
from datetime import datetime, timezone

from gateway_doubles import (
    RecordingBroker,
    create_external_image_response,
    create_image_generation,
    make_connection_error,
    make_status_error,
    make_timeout_error,
)
from openai_gateway.constants import IMAGE_GENERATION_ENTITY
from openai_gateway.errors import (
    CauseKind,
    FailureCause,
    InvalidFieldsError,
    OpenAIDependencyError,
    OpenAIDependencyValidationError,
    OpenAIServiceError,
    OpenAIValidationError,
)
from openai_gateway.external import ExternalImageData, ExternalImageGenerationRequest, ExternalImageGenerationResponse
from openai_gateway.models import ImageGeneration, ImageGenerationRequest
from openai_gateway.services.image_generation_service import ImageGenerationService


class ImageGenerationServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_generate_image_sends_mapped_request_and_maps_response(self) -> None:
        broker = RecordingBroker(
            image_response=create_external_image_response("https://img/1.png", "https://img/2.png")
        )
        service = ImageGenerationService(broker=broker)
        image_generation = create_image_generation()

        generated = await service.generate_image(image_generation)

        self.assertEqual(generated.request, image_generation.request)
        self.assertEqual(
            generated.response.created_at,
            datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc),
        )
        self.assertEqual(
            [result.url for result in generated.response.results],
            ["https://img/1.png", "https://img/2.png"],
        )
        self.assertEqual(
            broker.calls,
            [
                (
                    "post_image_generation_request",
                    ExternalImageGenerationRequest(
                        prompt="a lighthouse at dawn, watercolor",
                        n=2,
                        size="512x512",
                        response_format="url",
                        user="user-42",
                    ),
                )
            ],
        )

    async def test_generate_image_reports_every_invalid_field_without_calling_broker(self) -> None:
        broker = RecordingBroker()
        service = ImageGenerationService(broker=broker)
        invalid_image_generation = ImageGeneration(
            request=ImageGenerationRequest(
                prompt="   ",
                image_count=0,
                image_size="100x100",
                response_format=None,
            )
        )

        with self.assertRaises(OpenAIValidationError) as ctx:
            await service.generate_image(invalid_image_generation)

        cause = ctx.exception.cause
        self.assertIsInstance(cause, InvalidFieldsError)
        self.assertEqual(
            set(cause.errors),
            {
                "request.prompt",
                "request.image_count",
                "request.image_size",
                "request.response_format",
            },
        )
        self.assertEqual(broker.calls, [])

    async def test_generate_image_rejects_missing_image_generation(self) -> None:
        broker = RecordingBroker()
        service = ImageGenerationService(broker=broker)

        with self.assertRaises(OpenAIValidationError) as ctx:
            await service.generate_image(None)

        self.assertEqual(ctx.exception.entity, IMAGE_GENERATION_ENTITY)
        self.assertEqual(list(ctx.exception.cause.errors), ["image_generation"])
        self.assertEqual(broker.calls, [])

    async def test_generate_image_rejects_missing_request(self) -> None:
        broker = RecordingBroker()
        service = ImageGenerationService(broker=broker)

        with self.assertRaises(OpenAIValidationError) as ctx:
            await service.generate_image(ImageGeneration(request=None))

        self.assertEqual(list(ctx.exception.cause.errors), ["request"])
        self.assertEqual(broker.calls, [])

    async def test_generate_image_rejects_non_text_prompt(self) -> None:
        broker = RecordingBroker()
        service = ImageGenerationService(broker=broker)

        with self.assertRaises(OpenAIValidationError) as ctx:
            await service.generate_image(ImageGeneration(request=ImageGenerationRequest(prompt=5)))

        self.assertEqual(list(ctx.exception.cause.errors), ["request.prompt"])
        self.assertEqual(broker.calls, [])

    async def test_generate_image_raises_dependency_error_if_url_not_found(self) -> None:
        url_not_found_error = make_connection_error()
        broker = RecordingBroker(error=url_not_found_error)
        service = ImageGenerationService(broker=broker)

        with self.assertRaises(OpenAIDependencyError) as ctx:
            await service.generate_image(create_image_generation())

        expected = OpenAIDependencyError(
            IMAGE_GENERATION_ENTITY,
            FailureCause(CauseKind.INVALID_CONFIGURATION, url_not_found_error),
        )
        self.assertEqual(ctx.exception, expected)
        self.assertIs(ctx.exception.__cause__, url_not_found_error)
        self.assertEqual(len(broker.calls), 1)

    async def test_generate_image_raises_dependency_error_if_unauthorized(self) -> None:
        for status_code in (401, 403):
            with self.subTest(status_code=status_code):
                unauthorized_error = make_status_error(status_code)
                broker = RecordingBroker(error=unauthorized_error)
                service = ImageGenerationService(broker=broker)

                with self.assertRaises(OpenAIDependencyError) as ctx:
                    await service.generate_image(create_image_generation())

                expected = OpenAIDependencyError(
                    IMAGE_GENERATION_ENTITY,
                    FailureCause(CauseKind.UNAUTHORIZED, unauthorized_error),
                )
                self.assertEqual(ctx.exception, expected)
                self.assertEqual(len(broker.calls), 1)

    async def test_generate_image_raises_dependency_validation_error_if_not_found(self) -> None:
        not_found_error = make_status_error(404)
        broker = RecordingBroker(error=not_found_error)
        service = ImageGenerationService(broker=broker)

        with self.assertRaises(OpenAIDependencyValidationError) as ctx:
            await service.generate_image(create_image_generation())

        expected = OpenAIDependencyValidationError(
            IMAGE_GENERATION_ENTITY,
            FailureCause(CauseKind.NOT_FOUND, not_found_error),
        )
        self.assertEqual(ctx.exception, expected)
        self.assertEqual(len(broker.calls), 1)

    async def test_generate_image_classifies_every_transport_failure(self) -> None:
        scenarios = [
            (make_status_error(400), OpenAIDependencyValidationError, CauseKind.INVALID_REQUEST),
            (make_status_error(409), OpenAIDependencyValidationError, CauseKind.LOCKED),
            (make_status_error(423), OpenAIDependencyValidationError, CauseKind.LOCKED),
            (make_status_error(422), OpenAIDependencyValidationError, CauseKind.INVALID_CONFIGURATION),
            (make_status_error(429), OpenAIDependencyValidationError, CauseKind.EXCESSIVE_CALL),
            (make_status_error(500), OpenAIDependencyError, CauseKind.SERVER_ERROR),
            (make_status_error(503), OpenAIDependencyError, CauseKind.SERVER_ERROR),
            (make_timeout_error(), OpenAIDependencyError, CauseKind.UNREACHABLE),
            (make_status_error(418), OpenAIServiceError, CauseKind.UNCATEGORIZED),
            (RuntimeError("unexpected"), OpenAIServiceError, CauseKind.UNCATEGORIZED),
        ]
        for error, expected_type, cause_kind in scenarios:
            with self.subTest(error=repr(error)):
                broker = RecordingBroker(error=error)
                service = ImageGenerationService(broker=broker)

                with self.assertRaises(expected_type) as ctx:
                    await service.generate_image(create_image_generation())

                self.assertEqual(
                    ctx.exception,
                    expected_type(IMAGE_GENERATION_ENTITY, FailureCause(cause_kind, error)),
                )
                self.assertIs(ctx.exception.__cause__, error)
                self.assertEqual(len(broker.calls), 1)

    async def test_generate_image_classifies_empty_response_as_validation_error(self) -> None:
        broker = RecordingBroker(image_response=create_external_image_response())
        service = ImageGenerationService(broker=broker)

        with self.assertRaises(OpenAIValidationError) as ctx:
            await service.generate_image(create_image_generation())

        self.assertEqual(list(ctx.exception.cause.errors), ["results"])
        self.assertEqual(len(broker.calls), 1)

    async def test_generate_image_classifies_response_without_data_as_validation_error(self) -> None:
        broker = RecordingBroker(image_response=ExternalImageGenerationResponse(created=1, data=None))
        service = ImageGenerationService(broker=broker)

        with self.assertRaises(OpenAIValidationError) as ctx:
            await service.generate_image(create_image_generation())

        self.assertEqual(list(ctx.exception.cause.errors), ["results"])
        self.assertEqual(len(broker.calls), 1)

    async def test_generate_image_classifies_result_without_image_as_validation_error(self) -> None:
        broker = RecordingBroker(
            image_response=ExternalImageGenerationResponse(
                created=1, data=[ExternalImageData(url="https://img/1.png"), ExternalImageData()]
            )
        )
        service = ImageGenerationService(broker=broker)

        with self.assertRaises(OpenAIValidationError) as ctx:
            await service.generate_image(create_image_generation())

        self.assertEqual(
            ctx.exception.cause.errors, {"results[1]": ["Url or base64 image is required"]}
        )
        self.assertEqual(len(broker.calls), 1)


if __name__ == "__main__":
    unittest.main()

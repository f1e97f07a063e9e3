"""OpenAI gateway HTTP API using FastAPI + Mangum for AWS Lambda."""

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from mangum import Mangum

from openai_gateway.errors import (
    Category,
    InvalidFieldsError,
    OpenAIGatewayError,
    OpenAIValidationError,
)
from openai_gateway.infra.runtime import (
    ensure_langsmith_configured,
    flush_langsmith_traces,
    get_chat_completion_service,
    get_image_generation_service,
)
from openai_gateway.schemas import (
    ChatCompletionPayload,
    ChatCompletionResponsePayload,
    ImageGenerationPayload,
    ImageGenerationResponsePayload,
)
from openai_gateway.validation import collect_field_errors


app = FastAPI()
router = APIRouter(prefix="/api")

CATEGORY_STATUS_CODES: dict[Category, int] = {
    Category.VALIDATION: 400,
    Category.DEPENDENCY_VALIDATION: 422,
    Category.DEPENDENCY: 502,
    Category.SERVICE: 500,
}


def _to_http_exception(error: OpenAIGatewayError) -> HTTPException:
    return HTTPException(
        status_code=CATEGORY_STATUS_CODES[error.category],
        detail=error.to_payload(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies in the same shape as domain validation errors."""
    # Drop the leading "body" segment so fields read as they were sent.
    errors = [{**error, "loc": tuple(error["loc"])[1:]} for error in exc.errors()]
    validation_error = OpenAIValidationError(
        "request", InvalidFieldsError("request", collect_field_errors(errors, "request"))
    )
    return JSONResponse(
        status_code=CATEGORY_STATUS_CODES[validation_error.category],
        content={"detail": validation_error.to_payload()},
    )


@router.post("/images/generations", response_model=ImageGenerationResponsePayload)
async def generate_image(payload: ImageGenerationPayload) -> ImageGenerationResponsePayload:
    """Generate images through the OpenAI images API."""
    ensure_langsmith_configured()
    try:
        image_generation = await get_image_generation_service().generate_image(
            payload.to_domain()
        )
    except OpenAIGatewayError as e:
        raise _to_http_exception(e) from e
    finally:
        flush_langsmith_traces()
    return ImageGenerationResponsePayload.from_domain(image_generation)


@router.post("/chat/completions", response_model=ChatCompletionResponsePayload)
async def send_chat_completion(payload: ChatCompletionPayload) -> ChatCompletionResponsePayload:
    """Send messages to the OpenAI chat completions API."""
    ensure_langsmith_configured()
    try:
        chat_completion = await get_chat_completion_service().send_chat_completion(
            payload.to_domain()
        )
    except OpenAIGatewayError as e:
        raise _to_http_exception(e) from e
    finally:
        flush_langsmith_traces()
    return ChatCompletionResponsePayload.from_domain(chat_completion)


@router.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


app.include_router(router)


handler = Mangum(app)

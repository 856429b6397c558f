"""
Recognition API Routes

Endpoint for identifying a book from cover OCR text.
"""

from fastapi import APIRouter, Depends
from loguru import logger

from coverscan.api.dependencies import Settings, get_recognition_service, get_settings
from coverscan.api.schemas import ErrorResponse, RecognizeRequest, RecognizeResponse
from coverscan.identification.service import CoverRecognitionService


router = APIRouter(prefix="/recognize", tags=["recognition"])


@router.post(
    "",
    response_model=RecognizeResponse,
    responses={
        422: {"description": "Invalid request body"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
)
async def recognize_cover_text(
    request: RecognizeRequest,
    service: CoverRecognitionService = Depends(get_recognition_service),
    settings: Settings = Depends(get_settings),
) -> RecognizeResponse:
    """
    Identify a book from text recognised on its cover.

    Blank text or zero search hits return empty lists, not an error.
    """
    max_results = request.max_results or settings.max_results
    logger.info(f"Recognizing cover text ({len(request.text)} chars, max_results={max_results})")

    result = await service.recognize(request.text, max_results=max_results)

    return RecognizeResponse.model_validate(result.to_dict())

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.api.dependencies import (
    AnalysisStore,
    get_aggregator,
    get_pdf_extractor,
    get_settings,
    get_store,
)
from app.api.schemas import (
    GENERIC_SUBMISSION_ERROR,
    PARSE_METHOD_NAMES,
    AnalysisResponse,
    ErrorResponse,
    ParseInfo,
    ParseResponse,
)
from app.config.settings import Settings
from app.database.exceptions import AnalysisStoreError
from app.database.models import AnalysisSubmission
from app.documents.classifier import classify
from app.documents.exceptions import InvalidDocumentError, PdfExtractionFailedError
from app.documents.models import DocumentKind, SubmittedDocument
from app.logging.logger import Log
from app.pdf.extractor import PdfTextExtractor
from app.processor.aggregator import BatchAggregator

router = APIRouter()


def _error(status_code: int, error: str, details: dict[str, str] | str | None = None) -> JSONResponse:
    payload = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(exclude_none=True),
    )


async def _to_document(upload: StarletteUploadFile) -> SubmittedDocument:
    content = await upload.read()
    return SubmittedDocument(
        name=upload.filename or "",
        content_type=upload.content_type or "",
        byte_size=upload.size if upload.size is not None else len(content),
        content=content,
    )


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.post("/api/parse", response_model=ParseResponse, tags=["documents"])
async def parse_pdf(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    pdf_extractor: Annotated[PdfTextExtractor, Depends(get_pdf_extractor)],
) -> JSONResponse:
    """Extract the text of a single uploaded PDF."""
    try:
        form = await request.form()
        upload = form.get(settings.parse_field_name)
        if not isinstance(upload, StarletteUploadFile):
            Log.error("No file uploaded")
            return _error(status.HTTP_400_BAD_REQUEST, "No file uploaded")

        document = await _to_document(upload)
        Log.info(f"Received {document.name}: {len(document.content)} bytes")
        if classify(document.content_type) is not DocumentKind.PDF:
            return _error(
                status.HTTP_400_BAD_REQUEST, "Invalid file type. Please upload a PDF file."
            )

        result = await run_in_threadpool(
            pdf_extractor.extract, document.content, document.name, document.byte_size
        )
    except InvalidDocumentError as exc:
        Log.error(f"PDF validation failed: {exc}")
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except PdfExtractionFailedError as exc:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            str(exc),
            details={"primary": exc.primary_error, "fallback": exc.fallback_error},
        )
    except Exception as exc:
        Log.exception(f"Server error: {exc}")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Error processing file", details=str(exc)
        )

    response = ParseResponse(
        text=result.raw_text,
        info=ParseInfo(
            pages=result.page_count,
            text_length=len(result.raw_text),
            method=PARSE_METHOD_NAMES[result.method],
        ),
    )
    return JSONResponse(content=response.model_dump(by_alias=True))


@router.post(
    "/api/analyses",
    response_model=AnalysisResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["analyses"],
)
async def submit_analysis(
    aggregator: Annotated[BatchAggregator, Depends(get_aggregator)],
    store: Annotated[AnalysisStore, Depends(get_store)],
    user_id: Annotated[str, Form()],
    age: Annotated[int | None, Form()] = None,
    height: Annotated[float | None, Form()] = None,
    weight: Annotated[float | None, Form()] = None,
    activity_level: Annotated[str | None, Form()] = None,
    files: Annotated[list[UploadFile] | None, File()] = None,
) -> JSONResponse:
    """Extract metrics from every uploaded report and store the analysis."""
    documents = [await _to_document(upload) for upload in files or []]
    batch = await run_in_threadpool(aggregator.aggregate, documents)
    if not batch.succeeded:
        Log.error(f"No documents could be processed for user {user_id}")
        return _error(422, GENERIC_SUBMISSION_ERROR)

    submission = AnalysisSubmission(
        user_id=user_id,
        batch=batch,
        profile={
            "age": age,
            "height": height,
            "weight": weight,
            "activity_level": activity_level,
        },
    )
    try:
        analysis_id = await run_in_threadpool(store.save, submission)
    except AnalysisStoreError as exc:
        Log.error(f"Failed to store analysis for user {user_id}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SUBMISSION_ERROR)

    Log.info(f"Stored analysis {analysis_id} for user {user_id}")
    response = AnalysisResponse.from_batch(analysis_id, batch)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=response.model_dump())

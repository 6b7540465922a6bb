from typing import Protocol

from fastapi import Request

from app.config.settings import Settings
from app.database.models import AnalysisSubmission
from app.pdf.extractor import PdfTextExtractor
from app.processor.aggregator import BatchAggregator


class AnalysisStore(Protocol):
    def save(self, submission: AnalysisSubmission) -> int: ...


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pdf_extractor(request: Request) -> PdfTextExtractor:
    return request.app.state.pdf_extractor


def get_aggregator(request: Request) -> BatchAggregator:
    return request.app.state.aggregator


def get_store(request: Request) -> AnalysisStore:
    return request.app.state.store

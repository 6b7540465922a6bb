from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from app.config.settings import Settings
from app.documents.exceptions import DocumentError, ErrorKind
from app.documents.models import SubmittedDocument
from app.logging.logger import Log
from app.processor.merge import CompletedReport, MergeStrategy, MergeStrategyFactory
from app.processor.models import BatchResult, DocumentFailure, DocumentReport
from app.processor.processor import DocumentProcessor, build_processor


class BatchAggregator:
    """Processes every document of one analysis request concurrently.

    Failed documents are logged and recorded but never abort the batch.
    Reports are handed to the merge strategy in completion order.
    """

    def __init__(
        self,
        processor: DocumentProcessor,
        merge_strategy: MergeStrategy,
        max_workers: int = 4,
    ) -> None:
        self._processor = processor
        self._merge_strategy = merge_strategy
        self._max_workers = max(1, max_workers)

    def aggregate(self, documents: Sequence[SubmittedDocument]) -> BatchResult:
        """Process all documents and merge their metrics into one result."""
        Log.info(f"Aggregating metrics from {len(documents)} documents")
        if not documents:
            return BatchResult()

        completed: list[CompletedReport] = []
        failures: list[DocumentFailure] = []
        workers = min(self._max_workers, len(documents))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="document") as pool:
            futures: dict[Future[DocumentReport], int] = {
                pool.submit(self._processor.process, document): index
                for index, document in enumerate(documents)
            }
            for future in as_completed(futures):
                index = futures[future]
                document = documents[index]
                try:
                    report = future.result()
                except DocumentError as exc:
                    Log.error(f"Error processing file {document.name}: [{exc.kind.value}] {exc}")
                    failures.append(DocumentFailure(document.name, exc.kind, str(exc)))
                    continue
                except Exception as exc:
                    Log.exception(f"Unexpected error processing file {document.name}: {exc}")
                    failures.append(
                        DocumentFailure(document.name, ErrorKind.UNEXPECTED_FAILURE, str(exc))
                    )
                    continue
                completed.append(CompletedReport(submission_index=index, report=report))

        aggregated = self._merge_strategy.merge(completed)
        Log.info(
            f"Aggregated {len(completed)} documents ({len(failures)} failed): "
            f"{aggregated.to_dict()}"
        )
        return BatchResult(
            aggregated=aggregated,
            reports=[item.report for item in completed],
            failures=failures,
        )


def build_aggregator(settings: Settings) -> BatchAggregator:
    """Build a BatchAggregator with the configured processor and merge strategy."""
    return BatchAggregator(
        processor=build_processor(settings),
        merge_strategy=MergeStrategyFactory.create(settings.merge_strategy),
        max_workers=settings.aggregator_max_workers,
    )

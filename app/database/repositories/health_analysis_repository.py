from typing import Any

import psycopg
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.database.exceptions import AnalysisStoreError
from app.database.models import AnalysisSubmission
from app.metrics.models import MetricSet
from app.processor.models import DocumentReport


def _metric_columns(metrics: MetricSet) -> tuple[Any, ...]:
    return (
        metrics.systolic_bp,
        metrics.diastolic_bp,
        metrics.glucose,
        metrics.cholesterol,
        metrics.thyroid_tsh,
    )


class HealthAnalysisRepository:
    """Database operations for the health_analyses and medical_reports tables."""

    def save(self, submission: AnalysisSubmission) -> int:
        """Persist the aggregated record plus one row per processed document.

        Both writes happen in one transaction.

        Returns:
            ID of the new health_analyses row.

        Raises:
            AnalysisStoreError: if the database rejects the write.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO health_analyses (
                            user_id, profile, status,
                            bp_systolic, bp_diastolic, glucose, cholesterol, thyroid,
                            submitted_at
                        )
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                        RETURNING id
                        """,
                        (
                            submission.user_id,
                            Jsonb(submission.profile),
                            submission.status,
                            *_metric_columns(submission.batch.aggregated),
                            submission.submitted_at,
                        ),
                    )
                    row = cur.fetchone()
                    if row is None:
                        raise AnalysisStoreError("Insert into health_analyses returned no id")
                    analysis_id = int(row[0])
                    for report in submission.batch.reports:
                        self._insert_report(cur, analysis_id, report)
                conn.commit()
        except (psycopg.Error, RuntimeError) as exc:
            raise AnalysisStoreError(f"Failed to save health analysis: {exc}") from exc
        return analysis_id

    def _insert_report(
        self,
        cur: psycopg.Cursor[Any],
        analysis_id: int,
        report: DocumentReport,
    ) -> None:
        cur.execute(
            """
            INSERT INTO medical_reports (
                health_analysis_id, file_name, extracted_text, extraction_method,
                page_count, bp_systolic, bp_diastolic, glucose, cholesterol, thyroid,
                uploaded_at, analyzed_at
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            """,
            (
                analysis_id,
                report.document_name,
                report.extraction.raw_text,
                report.extraction.method.value,
                report.extraction.page_count,
                *_metric_columns(report.metrics),
                report.uploaded_at,
                report.analyzed_at,
            ),
        )

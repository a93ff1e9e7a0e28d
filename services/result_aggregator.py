"""
Running totals for one processing request.
"""

from typing import Optional
import structlog

from config.settings import settings
from models.case_pack import ProcessingResult
from services.product_update_service import BatchResult
from services.validation_service import ValidatedProduct

logger = structlog.get_logger(__name__)


class ResultAggregator:
    """
    Folds validation errors and batch outcomes into a ProcessingResult.

    Messages keep arrival order: validation errors first (file order),
    then upload errors (batch and row order). Only the first
    max_reported_errors are returned; error_count stays exact.
    """

    def __init__(self, max_reported_errors: Optional[int] = None):
        self.max_reported_errors = max_reported_errors or settings.max_reported_errors
        self.success_count = 0
        self.error_count = 0
        self.errors: list[str] = []

    def add_validation_errors(self, errors: list[str]) -> None:
        self.error_count += len(errors)
        self.errors.extend(errors)

    def add_batch(self, result: BatchResult) -> None:
        self.success_count += result.success_count
        self.error_count += result.error_count
        self.errors.extend(result.errors)

    def add_batch_failure(
        self,
        batch: list[ValidatedProduct],
        error: Exception,
    ) -> None:
        """Count every product in the batch as failed."""
        self.error_count += len(batch)
        self.errors.append(f"Batch error: {str(error) or 'Unknown error'}")

    def to_result(self, total_processed: int) -> ProcessingResult:
        if len(self.errors) > self.max_reported_errors:
            logger.info(
                "error_list_truncated",
                total=len(self.errors),
                reported=self.max_reported_errors
            )

        return ProcessingResult(
            success_count=self.success_count,
            error_count=self.error_count,
            total_processed=total_processed,
            errors=self.errors[:self.max_reported_errors],
        )

"""
Case pack upload pipeline.

validate rows -> split into batches -> update products batch by batch
-> aggregate counts and messages. Request-level problems raise before
any ShipHero call; row and batch problems end up in the result.
"""

from typing import Any, Callable, Mapping, Optional
import time
import structlog

from config.settings import settings
from exceptions import (
    IncompleteMappingError,
    MissingCredentialError,
    MissingUploadDataError,
    NoValidProductsError,
)
from integrations.shiphero import ShipHeroClient
from models.case_pack import FieldMapping, ProcessingResult
from services.product_update_service import ProductUpdateService
from services.result_aggregator import ResultAggregator
from services.validation_service import ValidatedProduct, validate_rows
from utils.batching import chunked

logger = structlog.get_logger(__name__)


class CasePackUploadService:
    """
    Runs one upload request end to end.

    Holds configuration only; all per-request state lives in process().
    """

    def __init__(
        self,
        client_factory: Callable[..., ShipHeroClient] = ShipHeroClient,
        batch_size: Optional[int] = None,
        row_delay_seconds: Optional[float] = None,
        max_reported_errors: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client_factory = client_factory
        self.batch_size = batch_size or settings.upload_batch_size
        self.row_delay_seconds = row_delay_seconds
        self.max_reported_errors = max_reported_errors or settings.max_reported_errors
        self._sleep = sleep

    def process(
        self,
        rows: Optional[list[Mapping[str, Any]]],
        mapping: Optional[FieldMapping],
        access_token: Optional[str],
        account_id: Optional[str] = None,
    ) -> ProcessingResult:
        """
        Validate rows and push the valid ones to ShipHero.

        Args:
            rows: Header-keyed CSV rows
            mapping: Columns supplying SKU, case barcode and case quantity
            access_token: ShipHero bearer token
            account_id: Accepted for the caller's bookkeeping, not sent

        Returns:
            ProcessingResult

        Raises:
            MissingUploadDataError: rows or mapping is missing
            MissingCredentialError: No access token
            IncompleteMappingError: A role has no column
            NoValidProductsError: Every row failed validation
        """
        if rows is None or mapping is None:
            raise MissingUploadDataError()

        if not access_token:
            raise MissingCredentialError()

        missing = mapping.missing_roles()
        if missing:
            raise IncompleteMappingError(missing)

        logger.info(
            "case_pack_upload_started",
            row_count=len(rows),
            account_id=account_id
        )

        validation = validate_rows(rows, mapping)
        if not validation.has_products:
            logger.warning(
                "case_pack_upload_no_valid_products",
                error_count=len(validation.errors)
            )
            raise NoValidProductsError(validation.errors[:self.max_reported_errors])

        aggregator = ResultAggregator(self.max_reported_errors)
        aggregator.add_validation_errors(validation.errors)

        client = self.client_factory(access_token=access_token)
        try:
            updater = ProductUpdateService(
                client,
                row_delay_seconds=self.row_delay_seconds,
                sleep=self._sleep,
            )
            self._run_batches(updater, validation.products, aggregator, account_id)
        finally:
            client.close()

        result = aggregator.to_result(total_processed=len(validation.products))

        logger.info(
            "case_pack_upload_completed",
            success_count=result.success_count,
            error_count=result.error_count,
            total_processed=result.total_processed
        )

        return result

    def _run_batches(
        self,
        updater: ProductUpdateService,
        products: list[ValidatedProduct],
        aggregator: ResultAggregator,
        account_id: Optional[str],
    ) -> None:
        """Batches run in order; a failure escaping one batch fails only that batch."""
        batches = chunked(products, self.batch_size)
        for number, batch in enumerate(batches, start=1):
            try:
                batch_result = updater.process_batch(batch, account_id=account_id)
            except Exception as e:
                logger.error(
                    "batch_failed",
                    batch=number,
                    size=len(batch),
                    error=str(e),
                    error_type=type(e).__name__
                )
                aggregator.add_batch_failure(batch, e)
                continue

            aggregator.add_batch(batch_result)
            logger.info(
                "batch_processed",
                batch=number,
                of=len(batches),
                success_count=batch_result.success_count,
                error_count=batch_result.error_count
            )


# Singleton instance
_case_pack_upload_service: Optional[CasePackUploadService] = None


def get_case_pack_upload_service() -> CasePackUploadService:
    """Get or create CasePackUploadService instance."""
    global _case_pack_upload_service
    if _case_pack_upload_service is None:
        _case_pack_upload_service = CasePackUploadService()
    return _case_pack_upload_service

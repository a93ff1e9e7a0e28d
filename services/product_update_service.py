"""
Product update service.

Pushes validated case packs to ShipHero one product at a time. Each
product is attempted exactly once; a failure is recorded and the
batch moves on.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional
import time
import structlog

from config.settings import settings
from exceptions import ShipHeroError
from integrations.shiphero import ShipHeroClient
from services.validation_service import ValidatedProduct

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OutcomeRecord:
    """Result of one product update."""
    row_number: int
    sku: str
    success: bool
    message: Optional[str] = None


@dataclass
class BatchResult:
    """Outcomes of one batch in upload order."""
    outcomes: list[OutcomeRecord] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def error_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def errors(self) -> list[str]:
        return [o.message for o in self.outcomes if not o.success and o.message]


def format_row_error(product: ValidatedProduct, reason: str) -> str:
    """User-facing message for a failed product update."""
    return f"Row {product.row_number} (SKU: {product.sku}): {reason}"


class ProductUpdateService:
    """
    Sequential product updater.

    Sleeps a fixed delay after every product, successful or not, to stay
    under the ShipHero rate limit.
    """

    def __init__(
        self,
        client: ShipHeroClient,
        row_delay_seconds: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.row_delay_seconds = (
            settings.upload_row_delay_seconds
            if row_delay_seconds is None
            else row_delay_seconds
        )
        self._sleep = sleep

    def update_product(self, product: ValidatedProduct) -> OutcomeRecord:
        """
        Update one product and classify the outcome.

        Only ShipHero failures are recorded here; anything else
        propagates to the caller's batch handling.
        """
        try:
            self.client.update_product_cases(
                sku=product.sku,
                case_barcode=product.case_barcode,
                case_quantity=product.case_quantity,
            )
        except ShipHeroError as e:
            logger.warning(
                "product_update_failed",
                sku=product.sku,
                row=product.row_number,
                error=e.message
            )
            return OutcomeRecord(
                row_number=product.row_number,
                sku=product.sku,
                success=False,
                message=format_row_error(product, e.message),
            )

        logger.info(
            "product_updated",
            sku=product.sku,
            row=product.row_number
        )
        return OutcomeRecord(
            row_number=product.row_number,
            sku=product.sku,
            success=True,
        )

    def process_batch(
        self,
        batch: list[ValidatedProduct],
        account_id: Optional[str] = None,
    ) -> BatchResult:
        """
        Update every product in the batch, in order.

        Args:
            batch: Products to update
            account_id: Logged only; the token already scopes the account

        Returns:
            BatchResult with one outcome per product
        """
        logger.debug(
            "processing_batch",
            size=len(batch),
            account_id=account_id
        )

        result = BatchResult()
        for product in batch:
            result.outcomes.append(self.update_product(product))
            self._sleep(self.row_delay_seconds)

        return result

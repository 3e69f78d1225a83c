# storefront/services/payment_service.py
import time

from storefront.utils.settings import CARD_PAYMENT_DELAY_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class PaymentService:
    """
    Simulated card payment: waits, then reports success.
    No gateway is contacted and nothing is authorized.
    """

    def __init__(self, delay_seconds: float | None = None):
        self.delay_seconds = CARD_PAYMENT_DELAY_SECONDS if delay_seconds is None else delay_seconds

    def charge_card(self, amount: int) -> bool:
        logger.info(f"Simulating card payment of {amount}")
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
        return True

import logging
import time
from typing import Any, Dict, Optional

from .jupiter import JupiterClient
from .models import TransactionResult

logger = logging.getLogger(__name__)


class SwapService:
    """Buy/sell bound to one wallet; raises ``SwapError`` on failure."""

    def __init__(self, user_public_key: str, client: Optional[JupiterClient] = None) -> None:
        self.user_public_key = user_public_key
        self.client = client or JupiterClient()

    def buy(self, token_mint: str, sol_amount: str, slippage_bps: Optional[int] = None) -> Dict[str, Any]:
        started = time.perf_counter()
        result = self.client.buy(token_mint, sol_amount, self.user_public_key, slippage_bps)
        return self._finish("buy", result, started, unit="tokens")

    def sell(self, token_mint: str, token_amount: str, slippage_bps: Optional[int] = None) -> Dict[str, Any]:
        started = time.perf_counter()
        result = self.client.sell(token_mint, token_amount, self.user_public_key, slippage_bps)
        return self._finish("sell", result, started, unit="lamports")

    def _finish(self, side: str, result: TransactionResult, started: float, unit: str) -> Dict[str, Any]:
        elapsed_ms = (time.perf_counter() - started) * 1000
        if result.success:
            logger.info("%s successful - expected output: %s %s", side, result.quote.get("outAmount"), unit)
            logger.info("%s took %.2fms", side, elapsed_ms)
        else:
            logger.error("%s failed: %s", side, result.error)
            logger.info("failed %s took %.2fms", side, elapsed_ms)
        return result.unwrap()

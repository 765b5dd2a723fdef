import logging
from typing import Any, Dict, Optional

from requests import RequestException

from .config import SOL_MINT, JupiterConfig
from .http_client import HttpClient
from .models import JupiterAPIError, QuoteOverrides, SwapOverrides, TransactionConfig, TransactionResult
from .resolve import build_quote_params, build_swap_instructions_payload

logger = logging.getLogger(__name__)

ROUTE_INFO_SLIPPAGE_BPS = 100


class JupiterClient:
    def __init__(self, config: Optional[JupiterConfig] = None, http: Optional[HttpClient] = None) -> None:
        self.config = config or JupiterConfig()
        self.http = http or HttpClient(
            base_url=self.config.base_url,
            timeout=self.config.request_timeout,
            user_agent=self.config.user_agent,
        )

    def with_config(self, config: JupiterConfig) -> "JupiterClient":
        """Return a client using ``config`` that shares this client's transport."""
        return JupiterClient(config=config, http=self.http)

    def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: str,
        overrides: Optional[QuoteOverrides] = None,
    ) -> Dict[str, Any]:
        params = build_quote_params(input_mint, output_mint, amount, self.config.quote, overrides)
        return self.http.get_json("/quote", params=params)

    def get_swap_instructions(
        self,
        user_public_key: str,
        quote_response: Dict[str, Any],
        overrides: Optional[SwapOverrides] = None,
    ) -> Dict[str, Any]:
        payload = build_swap_instructions_payload(user_public_key, quote_response, self.config.swap, overrides)
        return self.http.post_json("/swap-instructions", payload)

    def get_transaction(
        self,
        input_mint: str,
        output_mint: str,
        amount: str,
        slippage_bps: Optional[int] = None,
        config: Optional[TransactionConfig] = None,
    ) -> TransactionResult:
        """Fetch a quote, then the swap instructions built from it.

        Failures of either call are reported in the returned result rather
        than raised.
        """
        if config is None:
            raise ValueError("a TransactionConfig with user_public_key is required")
        try:
            quote = self.get_quote(input_mint, output_mint, amount, config.quote_overrides(slippage_bps))
            instructions = self.get_swap_instructions(config.user_public_key, quote, config.swap_overrides())
        except (JupiterAPIError, RequestException, ValueError) as exc:
            logger.error("Jupiter transaction error: %s", exc)
            return TransactionResult.failed(str(exc) or "Unknown error occurred")
        return TransactionResult.ok(quote, instructions)

    def buy(
        self,
        token_mint: str,
        sol_amount: str,
        user_public_key: str,
        slippage_bps: Optional[int] = None,
    ) -> TransactionResult:
        return self.get_transaction(
            SOL_MINT,
            token_mint,
            sol_amount,
            slippage_bps,
            TransactionConfig(user_public_key=user_public_key),
        )

    def sell(
        self,
        token_mint: str,
        token_amount: str,
        user_public_key: str,
        slippage_bps: Optional[int] = None,
    ) -> TransactionResult:
        return self.get_transaction(
            token_mint,
            SOL_MINT,
            token_amount,
            slippage_bps,
            TransactionConfig(user_public_key=user_public_key),
        )

    def get_route_info(self, input_mint: str, output_mint: str, amount: str) -> Dict[str, Any]:
        # Fixed 1% for inspection, independent of the configured slippage.
        return self.get_quote(input_mint, output_mint, amount, QuoteOverrides(slippage_bps=ROUTE_INFO_SLIPPAGE_BPS))

    def calculate_price_impact(self, input_mint: str, output_mint: str, amount: str) -> float:
        quote = self.get_route_info(input_mint, output_mint, amount)
        return float(quote["priceImpactPct"])

    @staticmethod
    def is_valid_mint(mint: Any) -> bool:
        """Shallow length check; ``False`` means "possibly invalid"."""
        return isinstance(mint, str) and 32 <= len(mint) <= 44

    def close(self) -> None:
        self.http.close()

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Union


class SwapError(RuntimeError):
    """Raised when a composed swap request did not produce instructions."""


@dataclass
class JupiterAPIError(Exception):
    """A Jupiter call that failed in transport or answered with an error.

    ``endpoint`` is the request line (``"GET /quote"``); ``body`` is the raw
    response text, which for Jupiter usually carries an ``error`` message.
    """

    message: str
    endpoint: Optional[str] = None
    http_status: Optional[int] = None
    body: Optional[str] = None
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        text = f"{self.endpoint}: {self.message}" if self.endpoint else self.message
        detail = []
        if self.http_status is not None:
            detail.append(f"status={self.http_status}")
        if self.body:
            detail.append(f"body={self.body}")
        if self.cause:
            detail.append(f"cause={self.cause}")
        return f"{text} ({', '.join(detail)})" if detail else text


@dataclass(frozen=True)
class PrioritizationFee:
    priority_level: str
    max_lamports: int

    def to_payload(self) -> Dict[str, Any]:
        return {
            "priorityLevelWithMaxLamports": {
                "priorityLevel": self.priority_level,
                "maxLamports": self.max_lamports,
            }
        }


@dataclass(frozen=True)
class QuoteOverrides:
    slippage_bps: Optional[int] = None
    swap_mode: Optional[str] = None
    restrict_intermediate_tokens: Optional[bool] = None
    only_direct_routes: Optional[bool] = None
    as_legacy_transaction: Optional[bool] = None
    max_accounts: Optional[int] = None
    dynamic_slippage: Optional[bool] = None
    dexes: Optional[Sequence[str]] = None
    exclude_dexes: Optional[Sequence[str]] = None
    platform_fee_bps: Optional[int] = None


@dataclass(frozen=True)
class SwapOverrides:
    wrap_and_unwrap_sol: Optional[bool] = None
    use_shared_accounts: Optional[bool] = None
    as_legacy_transaction: Optional[bool] = None
    dynamic_compute_unit_limit: Optional[bool] = None
    skip_user_accounts_rpc_calls: Optional[bool] = None
    dynamic_slippage: Optional[bool] = None
    fee_account: Optional[str] = None
    tracking_account: Optional[str] = None
    destination_token_account: Optional[str] = None
    compute_unit_price_micro_lamports: Optional[int] = None
    blockhash_slots_to_expiry: Optional[int] = None
    prioritization_fee_lamports: Optional[Union[PrioritizationFee, int]] = None
    payer: Optional[str] = None


@dataclass(frozen=True)
class TransactionConfig:
    user_public_key: str
    swap_mode: Optional[str] = None
    prioritization_fee_lamports: Optional[Union[PrioritizationFee, int]] = None
    as_legacy_transaction: Optional[bool] = None
    dynamic_compute_unit_limit: Optional[bool] = None
    dynamic_slippage: Optional[bool] = None

    def quote_overrides(self, slippage_bps: Optional[int] = None) -> QuoteOverrides:
        return QuoteOverrides(
            slippage_bps=slippage_bps,
            swap_mode=self.swap_mode,
            as_legacy_transaction=self.as_legacy_transaction,
            dynamic_slippage=self.dynamic_slippage,
        )

    def swap_overrides(self) -> SwapOverrides:
        return SwapOverrides(
            as_legacy_transaction=self.as_legacy_transaction,
            dynamic_compute_unit_limit=self.dynamic_compute_unit_limit,
            dynamic_slippage=self.dynamic_slippage,
            prioritization_fee_lamports=self.prioritization_fee_lamports,
        )


@dataclass
class TransactionResult:
    """Outcome of the quote + swap-instructions sequence.

    A failed result keeps empty placeholders for ``quote`` and
    ``instructions`` and a human-readable ``error``.
    """

    quote: Dict[str, Any] = field(default_factory=dict)
    instructions: Dict[str, Any] = field(default_factory=dict)
    success: bool = False
    error: Optional[str] = None

    @classmethod
    def ok(cls, quote: Dict[str, Any], instructions: Dict[str, Any]) -> "TransactionResult":
        return cls(quote=quote, instructions=instructions, success=True)

    @classmethod
    def failed(cls, message: str) -> "TransactionResult":
        return cls(success=False, error=message)

    def unwrap(self) -> Dict[str, Any]:
        if not self.success:
            raise SwapError(self.error or "Unknown error occurred")
        return self.instructions

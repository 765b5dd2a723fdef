from ._version import __version__
from .config import (
    PRESETS,
    SOL_MINT,
    TOKENS,
    JupiterConfig,
    QuoteDefaults,
    SwapDefaults,
    apply_preset,
    enable_dynamic_slippage,
    load_config,
    set_max_accounts,
    set_preferred_dexes,
    set_slippage,
)
from .jupiter import JupiterClient
from .models import (
    JupiterAPIError,
    PrioritizationFee,
    QuoteOverrides,
    SwapError,
    SwapOverrides,
    TransactionConfig,
    TransactionResult,
)
from .swap import SwapService

__all__ = [
    "PRESETS",
    "SOL_MINT",
    "TOKENS",
    "JupiterConfig",
    "QuoteDefaults",
    "SwapDefaults",
    "apply_preset",
    "enable_dynamic_slippage",
    "load_config",
    "set_max_accounts",
    "set_preferred_dexes",
    "set_slippage",
    "JupiterClient",
    "JupiterAPIError",
    "PrioritizationFee",
    "QuoteOverrides",
    "SwapError",
    "SwapOverrides",
    "TransactionConfig",
    "TransactionResult",
    "SwapService",
]

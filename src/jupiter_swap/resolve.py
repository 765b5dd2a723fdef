"""Merging of call-site overrides with configured defaults.

Every outbound field is described once as ``(wire name, attribute, rule)``.
A rule pairs a merge function ``(override, default) -> value`` with an
inclusion predicate ``(override, default, value) -> bool``; a field that is
not included is left out of the request entirely, never sent as null.
"""

from collections import OrderedDict
from typing import Any, Callable, Dict, NamedTuple, Optional, Sequence, Tuple

from .config import QuoteDefaults, SwapDefaults
from .models import PrioritizationFee, QuoteOverrides, SwapOverrides


class Rule(NamedTuple):
    merge: Callable[[Any, Any], Any]
    include: Callable[[Any, Any, Any], bool]


def _coalesce(override: Any, default: Any) -> Any:
    return default if override is None else override


def _either(override: Any, default: Any) -> Any:
    # 0 and "" count as "not provided" and fall back to the default.
    return override or default


def _override_only(override: Any, default: Any) -> Any:
    return override


# Always present; a supplied override wins even when falsy.
COALESCE = Rule(merge=_coalesce, include=lambda override, default, value: True)
# Present when either side is non-empty; the override list replaces the default.
LIST = Rule(merge=_coalesce, include=lambda override, default, value: bool(override) or bool(default))
# Present only when the coalesced value is non-zero.
NONZERO = Rule(merge=_coalesce, include=lambda override, default, value: bool(value))
# Logical-or merge, present only when the result is truthy.
EITHER = Rule(merge=_either, include=lambda override, default, value: bool(value))
# No configured default; present only when supplied.
PASS_THROUGH = Rule(merge=_override_only, include=lambda override, default, value: bool(value))

FieldSpec = Tuple[str, str, Rule]

QUOTE_FIELDS: Tuple[FieldSpec, ...] = (
    ("slippageBps", "slippage_bps", COALESCE),
    ("swapMode", "swap_mode", COALESCE),
    ("restrictIntermediateTokens", "restrict_intermediate_tokens", COALESCE),
    ("onlyDirectRoutes", "only_direct_routes", COALESCE),
    ("asLegacyTransaction", "as_legacy_transaction", COALESCE),
    ("maxAccounts", "max_accounts", COALESCE),
    ("dynamicSlippage", "dynamic_slippage", COALESCE),
    ("dexes", "dexes", LIST),
    ("excludeDexes", "exclude_dexes", LIST),
    ("platformFeeBps", "platform_fee_bps", NONZERO),
)

SWAP_FIELDS: Tuple[FieldSpec, ...] = (
    ("wrapAndUnwrapSol", "wrap_and_unwrap_sol", COALESCE),
    ("useSharedAccounts", "use_shared_accounts", COALESCE),
    ("asLegacyTransaction", "as_legacy_transaction", COALESCE),
    ("dynamicComputeUnitLimit", "dynamic_compute_unit_limit", COALESCE),
    ("skipUserAccountsRpcCalls", "skip_user_accounts_rpc_calls", COALESCE),
    ("dynamicSlippage", "dynamic_slippage", COALESCE),
    ("feeAccount", "fee_account", EITHER),
    ("trackingAccount", "tracking_account", EITHER),
    ("destinationTokenAccount", "destination_token_account", EITHER),
    ("computeUnitPriceMicroLamports", "compute_unit_price_micro_lamports", EITHER),
    ("blockhashSlotsToExpiry", "blockhash_slots_to_expiry", EITHER),
    ("prioritizationFeeLamports", "prioritization_fee_lamports", PASS_THROUGH),
    ("payer", "payer", PASS_THROUGH),
)


def resolve_fields(specs: Sequence[FieldSpec], defaults: Any, overrides: Any) -> "OrderedDict[str, Any]":
    resolved: "OrderedDict[str, Any]" = OrderedDict()
    for wire_name, attr, rule in specs:
        override = getattr(overrides, attr, None)
        default = getattr(defaults, attr, None)
        value = rule.merge(override, default)
        if rule.include(override, default, value):
            resolved[wire_name] = value
    return resolved


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(value)
    return str(value)


def build_quote_params(
    input_mint: str,
    output_mint: str,
    amount: str,
    defaults: QuoteDefaults,
    overrides: Optional[QuoteOverrides] = None,
) -> Dict[str, str]:
    params: Dict[str, str] = {
        "inputMint": input_mint,
        "outputMint": output_mint,
        "amount": str(amount),
    }
    for key, value in resolve_fields(QUOTE_FIELDS, defaults, overrides or QuoteOverrides()).items():
        params[key] = _query_value(value)
    return params


def build_swap_instructions_payload(
    user_public_key: str,
    quote_response: Dict[str, Any],
    defaults: SwapDefaults,
    overrides: Optional[SwapOverrides] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "userPublicKey": user_public_key,
        "quoteResponse": quote_response,
    }
    payload.update(resolve_fields(SWAP_FIELDS, defaults, overrides or SwapOverrides()))
    fee = payload.get("prioritizationFeeLamports")
    if isinstance(fee, PrioritizationFee):
        payload["prioritizationFeeLamports"] = fee.to_payload()
    return payload

import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Tuple

import yaml

from ._version import __version__

SOL_MINT = "So11111111111111111111111111111111111111112"

TOKENS: Dict[str, str] = {
    "SOL": SOL_MINT,
    "USDC": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "USDT": "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB",
    "BONK": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
    "WIF": "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm",
    "JUP": "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",
    "TEST": "5NnBnzmo2817MbkWjTv23eMqFjMzryLeYXgKmiZb3m16",
}


@dataclass(frozen=True)
class QuoteDefaults:
    slippage_bps: int = 100
    swap_mode: str = "ExactIn"
    restrict_intermediate_tokens: bool = True
    # Multi-hop routes are disabled unless a preset or override turns them on.
    only_direct_routes: bool = True
    as_legacy_transaction: bool = False
    max_accounts: int = 64
    dynamic_slippage: bool = False
    dexes: Tuple[str, ...] = ()
    exclude_dexes: Tuple[str, ...] = ()
    platform_fee_bps: int = 0


@dataclass(frozen=True)
class SwapDefaults:
    wrap_and_unwrap_sol: bool = True
    use_shared_accounts: bool = False
    as_legacy_transaction: bool = False
    dynamic_compute_unit_limit: bool = True
    skip_user_accounts_rpc_calls: bool = False
    dynamic_slippage: bool = False
    fee_account: str = ""
    tracking_account: str = ""
    destination_token_account: str = ""
    compute_unit_price_micro_lamports: int = 0
    # ~60 seconds at 400ms/slot
    blockhash_slots_to_expiry: int = 3


@dataclass(frozen=True)
class JupiterConfig:
    quote: QuoteDefaults = field(default_factory=QuoteDefaults)
    swap: SwapDefaults = field(default_factory=SwapDefaults)
    base_url: str = "https://lite-api.jup.ag/swap/v1"
    request_timeout: float = 30.0
    user_agent: str = f"jupiter-swap/{__version__}"


PRESETS: Dict[str, Dict[str, Any]] = {
    "conservative": {
        "slippage_bps": 50,
        "restrict_intermediate_tokens": True,
        "only_direct_routes": True,
        "max_accounts": 32,
    },
    "aggressive": {
        "slippage_bps": 300,
        "restrict_intermediate_tokens": False,
        "only_direct_routes": False,
        "max_accounts": 64,
    },
    "fast": {
        "slippage_bps": 100,
        "dynamic_compute_unit_limit": True,
        "skip_user_accounts_rpc_calls": True,
        "compute_unit_price_micro_lamports": 1000,
    },
}


def _field_names(cls) -> Tuple[str, ...]:
    return tuple(f.name for f in fields(cls))


def _subset(values: Mapping[str, Any], cls) -> Dict[str, Any]:
    names = _field_names(cls)
    return {key: value for key, value in values.items() if key in names}


def _dex_list(value: Any) -> Tuple[str, ...]:
    # A bare name is one DEX, not a sequence of characters.
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if not isinstance(value, Iterable):
        raise ValueError(f"expected a list of DEX names, got {value!r}")
    return tuple(value)


def _replace_sections(config: JupiterConfig, quote_values: Dict[str, Any], swap_values: Dict[str, Any]) -> JupiterConfig:
    for list_field in ("dexes", "exclude_dexes"):
        if list_field in quote_values:
            quote_values[list_field] = _dex_list(quote_values[list_field])
    return replace(
        config,
        quote=replace(config.quote, **quote_values),
        swap=replace(config.swap, **swap_values),
    )


def _with_values(config: JupiterConfig, values: Mapping[str, Any]) -> JupiterConfig:
    """Write each key into whichever of the quote/swap defaults declares it."""
    return _replace_sections(config, _subset(values, QuoteDefaults), _subset(values, SwapDefaults))


def apply_preset(config: JupiterConfig, name: str) -> JupiterConfig:
    try:
        preset = PRESETS[name]
    except KeyError:
        raise ValueError(f"unknown preset {name!r}; expected one of {sorted(PRESETS)}") from None
    return _with_values(config, preset)


def set_slippage(config: JupiterConfig, bps: int) -> JupiterConfig:
    return replace(config, quote=replace(config.quote, slippage_bps=bps))


def set_max_accounts(config: JupiterConfig, count: int) -> JupiterConfig:
    return replace(config, quote=replace(config.quote, max_accounts=count))


def enable_dynamic_slippage(config: JupiterConfig) -> JupiterConfig:
    return replace(
        config,
        quote=replace(config.quote, dynamic_slippage=True),
        swap=replace(config.swap, dynamic_slippage=True),
    )


def set_preferred_dexes(config: JupiterConfig, dexes: Iterable[str]) -> JupiterConfig:
    return replace(config, quote=replace(config.quote, dexes=_dex_list(dexes)))


TOP_LEVEL_KEYS = frozenset(
    {"preset", "quote", "swap", "base_url", "baseUrl", "request_timeout", "requestTimeout"}
)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _section(raw: Any, cls, section: str) -> Dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"config section {section!r} must be a mapping")
    names = _field_names(cls)
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        name = _snake(str(key))
        if name not in names:
            raise ValueError(f"unknown {section} setting {key!r}")
        values[name] = value
    return values


def config_from_dict(raw: Mapping[str, Any], base: JupiterConfig = JupiterConfig()) -> JupiterConfig:
    """Build a config from a plain mapping.

    The preset (if any) is applied first, then the explicit ``quote`` and
    ``swap`` sections, then the transport settings.
    """
    unknown = sorted(str(key) for key in raw if key not in TOP_LEVEL_KEYS)
    if unknown:
        raise ValueError(f"unknown config keys {unknown}; expected some of {sorted(TOP_LEVEL_KEYS)}")

    config = base
    preset = raw.get("preset")
    if preset:
        config = apply_preset(config, preset)

    config = _replace_sections(
        config,
        _section(raw.get("quote"), QuoteDefaults, "quote"),
        _section(raw.get("swap"), SwapDefaults, "swap"),
    )

    transport: Dict[str, Any] = {}
    if raw.get("base_url") or raw.get("baseUrl"):
        transport["base_url"] = raw.get("base_url") or raw.get("baseUrl")
    timeout = raw.get("request_timeout", raw.get("requestTimeout"))
    if timeout is not None:
        transport["request_timeout"] = float(timeout)
    return replace(config, **transport)


def load_config(config_path: Path) -> JupiterConfig:
    with Path(config_path).open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"{config_path}: expected a mapping at the top level")
    return config_from_dict(raw)

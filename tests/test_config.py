import tempfile
import unittest
from pathlib import Path

from jupiter_swap import __version__
from jupiter_swap.config import (
    SOL_MINT,
    TOKENS,
    JupiterConfig,
    apply_preset,
    config_from_dict,
    enable_dynamic_slippage,
    load_config,
    set_max_accounts,
    set_preferred_dexes,
    set_slippage,
)
from jupiter_swap.resolve import build_quote_params


class PresetTests(unittest.TestCase):
    def test_conservative_preset_updates_quote_defaults(self) -> None:
        config = apply_preset(JupiterConfig(), "conservative")

        self.assertEqual(config.quote.slippage_bps, 50)
        self.assertTrue(config.quote.restrict_intermediate_tokens)
        self.assertTrue(config.quote.only_direct_routes)
        self.assertEqual(config.quote.max_accounts, 32)

    def test_aggressive_preset_values_are_literal(self) -> None:
        config = apply_preset(JupiterConfig(), "aggressive")

        self.assertEqual(config.quote.slippage_bps, 300)
        self.assertFalse(config.quote.restrict_intermediate_tokens)
        self.assertFalse(config.quote.only_direct_routes)
        self.assertEqual(config.quote.max_accounts, 64)

    def test_fast_preset_touches_quote_and_swap(self) -> None:
        config = apply_preset(JupiterConfig(), "fast")

        self.assertEqual(config.quote.slippage_bps, 100)
        self.assertTrue(config.swap.dynamic_compute_unit_limit)
        self.assertTrue(config.swap.skip_user_accounts_rpc_calls)
        self.assertEqual(config.swap.compute_unit_price_micro_lamports, 1000)

    def test_preset_does_not_mutate_input(self) -> None:
        base = JupiterConfig()
        apply_preset(base, "aggressive")

        self.assertEqual(base, JupiterConfig())

    def test_unknown_preset_rejected(self) -> None:
        with self.assertRaises(ValueError):
            apply_preset(JupiterConfig(), "reckless")


class SetterTests(unittest.TestCase):
    def test_setters_return_new_config(self) -> None:
        base = JupiterConfig()

        config = set_max_accounts(set_slippage(base, 75), 40)
        config = set_preferred_dexes(config, ["Raydium", "Orca V2"])
        config = enable_dynamic_slippage(config)

        self.assertEqual(config.quote.slippage_bps, 75)
        self.assertEqual(config.quote.max_accounts, 40)
        self.assertEqual(config.quote.dexes, ("Raydium", "Orca V2"))
        self.assertTrue(config.quote.dynamic_slippage)
        self.assertTrue(config.swap.dynamic_slippage)
        self.assertEqual(base.quote.slippage_bps, 100)
        self.assertFalse(base.swap.dynamic_slippage)

    def test_preferred_dexes_accepts_single_name(self) -> None:
        config = set_preferred_dexes(JupiterConfig(), "Raydium")
        self.assertEqual(config.quote.dexes, ("Raydium",))

    def test_default_user_agent_tracks_package_version(self) -> None:
        self.assertEqual(JupiterConfig().user_agent, f"jupiter-swap/{__version__}")


class LoadConfigTests(unittest.TestCase):
    def test_preset_applied_before_explicit_sections(self) -> None:
        config = config_from_dict(
            {
                "preset": "aggressive",
                "quote": {"slippageBps": 120, "excludeDexes": ["Meteora DLMM"]},
                "swap": {"fee_account": "FeeAcct"},
                "request_timeout": 10,
            }
        )

        self.assertEqual(config.quote.slippage_bps, 120)
        self.assertFalse(config.quote.only_direct_routes)
        self.assertEqual(config.quote.exclude_dexes, ("Meteora DLMM",))
        self.assertEqual(config.swap.fee_account, "FeeAcct")
        self.assertEqual(config.request_timeout, 10.0)

    def test_unknown_setting_rejected(self) -> None:
        with self.assertRaises(ValueError):
            config_from_dict({"quote": {"slippage": 1}})

    def test_unknown_top_level_key_rejected(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            config_from_dict({"qoute": {"slippageBps": 10}})

        self.assertIn("qoute", str(ctx.exception))

    def test_camel_case_transport_keys_accepted(self) -> None:
        config = config_from_dict({"baseUrl": "https://example.com/v1", "requestTimeout": 5})

        self.assertEqual(config.base_url, "https://example.com/v1")
        self.assertEqual(config.request_timeout, 5.0)

    def test_single_dex_name_is_one_entry(self) -> None:
        config = config_from_dict({"quote": {"dexes": "Raydium", "excludeDexes": "Meteora DLMM"}})

        self.assertEqual(config.quote.dexes, ("Raydium",))
        self.assertEqual(config.quote.exclude_dexes, ("Meteora DLMM",))
        params = build_quote_params(SOL_MINT, TOKENS["USDC"], "1", config.quote)
        self.assertEqual(params["dexes"], "Raydium")
        self.assertEqual(params["excludeDexes"], "Meteora DLMM")

    def test_non_list_dexes_rejected(self) -> None:
        with self.assertRaises(ValueError):
            config_from_dict({"quote": {"dexes": 5}})

    def test_load_config_reads_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "jupiter.yaml"
            path.write_text(
                "preset: conservative\n"
                "base_url: https://example.com/swap/v1\n"
                "swap:\n"
                "  computeUnitPriceMicroLamports: 250\n",
                encoding="utf-8",
            )

            config = load_config(path)

        self.assertEqual(config.quote.slippage_bps, 50)
        self.assertEqual(config.swap.compute_unit_price_micro_lamports, 250)
        self.assertEqual(config.base_url, "https://example.com/swap/v1")

    def test_empty_yaml_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.yaml"
            path.write_text("", encoding="utf-8")

            self.assertEqual(load_config(path), JupiterConfig())


if __name__ == "__main__":
    unittest.main()

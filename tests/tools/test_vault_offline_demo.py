# [TESTER] v1

from __future__ import annotations

import importlib.util
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def _load_demo():
    path = ROOT / "tools" / "vault_offline_demo.py"
    spec = importlib.util.spec_from_file_location("vault_offline_demo", path)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_demo_runs_default_scenario(capsys) -> None:
    demo = _load_demo()
    assert demo.main([]) == 0
    out = capsys.readouterr().out
    assert "alice deposited (1000000, 1000000) -> 999000 shares" in out
    assert "[vault-demo] OK" in out


def test_demo_reports_pool_errors(capsys) -> None:
    demo = _load_demo()
    assert demo.main(["--base", "10", "--quote", "10"]) == 1
    assert "InsufficientInitialLiquidity" in capsys.readouterr().out


def test_demo_loads_yaml_config(tmp_path, capsys) -> None:
    cfg = tmp_path / "pool.yaml"
    cfg.write_text(
        "\n".join(
            [
                f'pool_address: "0x{"70" * 20}"',
                f'matching_engine: "0x{"e0" * 20}"',
                f'native_wrapper_asset: "0x{"33" * 20}"',
                f'base_asset: "0x{"33" * 20}"',
                f'quote_asset: "0x{"22" * 20}"',
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    demo = _load_demo()
    assert demo.main(["--config", str(cfg)]) == 0

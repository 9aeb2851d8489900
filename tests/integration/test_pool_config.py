# [TESTER] v1

from __future__ import annotations

import pytest

from mmvault.config import PoolConfig, load_pool_config, pool_config_from_env, pool_config_from_mapping
from mmvault.errors import InvalidArgumentError

FIELDS = {
    "pool_address": "0x" + "70" * 20,
    "matching_engine": "0x" + "e0" * 20,
    "native_wrapper_asset": "0x" + "33" * 20,
    "base_asset": "0x" + "33" * 20,
    "quote_asset": "0x" + "22" * 20,
}


def test_config_validation() -> None:
    with pytest.raises(InvalidArgumentError, match="differ"):
        PoolConfig(**{**FIELDS, "quote_asset": FIELDS["base_asset"]})
    with pytest.raises(InvalidArgumentError, match="non-empty"):
        PoolConfig(**{**FIELDS, "matching_engine": "  "})
    with pytest.raises(InvalidArgumentError, match="collide"):
        PoolConfig(**{**FIELDS, "pool_address": FIELDS["quote_asset"]})


def test_native_enabled_follows_base_asset() -> None:
    assert PoolConfig(**FIELDS).native_enabled
    assert not PoolConfig(**{**FIELDS, "base_asset": "0x" + "11" * 20}).native_enabled


def test_mapping_rejects_unknown_and_missing_keys() -> None:
    with pytest.raises(InvalidArgumentError, match="unknown pool config keys: fee_bps"):
        pool_config_from_mapping({**FIELDS, "fee_bps": 30})
    partial = dict(FIELDS)
    del partial["quote_asset"]
    with pytest.raises(InvalidArgumentError, match="incomplete"):
        pool_config_from_mapping(partial)


def test_load_pool_config_from_yaml(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    lines = [f'{k}: "{v}"' for k, v in FIELDS.items()]
    lines += ["name: Maker Vault", "symbol: MKV"]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    cfg = load_pool_config(path)
    assert cfg.base_asset == FIELDS["base_asset"]
    assert (cfg.name, cfg.symbol) == ("Maker Vault", "MKV")


def test_load_pool_config_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(InvalidArgumentError, match="mapping"):
        load_pool_config(path)


def test_pool_config_from_env(monkeypatch) -> None:
    for key, value in FIELDS.items():
        monkeypatch.setenv("MMVAULT_" + key.upper(), f"  {value}  ")
    monkeypatch.setenv("MMVAULT_SYMBOL", "")

    cfg = pool_config_from_env()
    assert cfg.pool_address == FIELDS["pool_address"]
    assert cfg.symbol == "VLT"


def test_pool_config_from_env_reports_missing(monkeypatch) -> None:
    monkeypatch.delenv("MMVAULT_QUOTE_ASSET", raising=False)
    for key, value in FIELDS.items():
        if key != "quote_asset":
            monkeypatch.setenv("MMVAULT_" + key.upper(), value)
    with pytest.raises(InvalidArgumentError, match="MMVAULT_QUOTE_ASSET"):
        pool_config_from_env()

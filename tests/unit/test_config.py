"""
tests/unit/test_config.py - Environment config loading and key resolution.
"""

import pytest
import pytest_asyncio

from config import DeepBookConfig, load_environment, load_yaml
from core.constants import ErrorCode
from core.exceptions import ConfigError, NotFoundError

MINIMAL_YAML = """
packages:
  deepbook: "0xdee9"
  registry: "0x1e9"
coins:
  AAA:
    address: "0xa"
    type: "0xa::aaa::AAA"
    scalar: 1000
  BBB:
    address: "0xb"
    type: "0xb::bbb::BBB"
    scalar: 10
pools:
  AAA_BBB:
    address: "0xab"
    base_coin: AAA
    quote_coin: BBB
"""


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "mainnet.yaml").write_text(MINIMAL_YAML, encoding="utf-8")
    return tmp_path


class TestLoading:

    def test_load_yaml_missing(self, tmp_path):
        with pytest.raises(ConfigError):
            load_yaml("nope.yaml", tmp_path)

    def test_unknown_environment(self):
        with pytest.raises(ConfigError) as exc_info:
            load_environment("devnet")
        assert "mainnet" in exc_info.value.details["known"]

    @pytest.mark.parametrize("env", ["mainnet", "testnet"])
    @pytest.mark.asyncio
    async def test_bundled_environments(self, env):
        config = DeepBookConfig(env)
        await config.init()
        assert config.initialized
        assert "DEEP_SUI" in config.pool_keys
        assert config.get_coin("SUI").scalar == 10**9
        assert config.deepbook_package_id.startswith("0x")
        assert len(config.registry_id) == 66

    @pytest.mark.asyncio
    async def test_custom_dir(self, config_dir):
        config = DeepBookConfig("mainnet", config_dir)
        await config.init()

        pool = config.get_pool("AAA_BBB")
        assert pool.base_coin.scalar == 1000
        assert pool.quote_coin.key == "BBB"
        assert pool.address == "0x" + "ab".rjust(64, "0")
        assert config.deepbook_package_id == "0x" + "dee9".rjust(64, "0")

    @pytest.mark.asyncio
    async def test_missing_packages(self, tmp_path):
        (tmp_path / "mainnet.yaml").write_text("coins: {}\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            await DeepBookConfig("mainnet", tmp_path).init()

    @pytest.mark.asyncio
    async def test_pool_with_unknown_coin(self, tmp_path):
        text = MINIMAL_YAML.replace("quote_coin: BBB", "quote_coin: CCC")
        (tmp_path / "mainnet.yaml").write_text(text, encoding="utf-8")
        with pytest.raises(NotFoundError) as exc_info:
            await DeepBookConfig("mainnet", tmp_path).init()
        assert exc_info.value.code == ErrorCode.COIN_NOT_FOUND

    @pytest.mark.asyncio
    async def test_init_is_idempotent(self, config_dir):
        config = DeepBookConfig("mainnet", config_dir)
        await config.init()
        config.add_coin("CCC", "0xc", "0xc::ccc::CCC", 1)
        await config.init()
        assert "CCC" in config.coin_keys


class TestLookups:

    @pytest_asyncio.fixture
    async def config(self, config_dir):
        config = DeepBookConfig("mainnet", config_dir)
        await config.init()
        return config

    def test_use_before_init(self, config_dir):
        config = DeepBookConfig("mainnet", config_dir)
        with pytest.raises(ConfigError):
            config.get_pool("AAA_BBB")
        with pytest.raises(ConfigError):
            config.get_coin("AAA")
        with pytest.raises(ConfigError):
            config.deepbook_package_id

    def test_registration_before_init(self, config_dir):
        config = DeepBookConfig("mainnet", config_dir)
        with pytest.raises(ConfigError):
            config.add_coin("CCC", "0xc", "0xc::ccc::CCC", 1)
        with pytest.raises(ConfigError):
            config.add_pool("AAA_BBB", "0xab", "AAA", "BBB")
        assert config.coin_keys == []
        assert config.pool_keys == []

    @pytest.mark.asyncio
    async def test_unknown_keys(self, config):
        with pytest.raises(NotFoundError) as exc_info:
            config.get_pool("ZZZ")
        assert exc_info.value.code == ErrorCode.POOL_NOT_FOUND

        with pytest.raises(NotFoundError) as exc_info:
            config.get_coin("ZZZ")
        assert exc_info.value.code == ErrorCode.COIN_NOT_FOUND

    @pytest.mark.asyncio
    async def test_add_pool(self, config):
        pool = config.add_pool("BBB_AAA", "0xba", "BBB", "AAA")
        assert config.get_pool("BBB_AAA") is pool
        assert pool.type_arguments == ["0xb::bbb::BBB", "0xa::aaa::AAA"]

    @pytest.mark.asyncio
    async def test_add_coin_rejects_zero_scalar(self, config):
        with pytest.raises(ValueError):
            config.add_coin("ZERO", "0x1", "0x1::z::Z", 0)

# PATH: config/__init__.py
"""
Configuration loading for the DeepBook query client.

DeepBookConfig resolves human-readable coin and pool keys to on-chain
descriptors. It reads config/<env>.yaml and must be initialized with
`await config.init()` before first use.
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from core.constants import Environment, ErrorCode
from core.exceptions import ConfigError, NotFoundError
from core.logging import get_logger
from core.models import Coin, Pool
from core.validators import normalize_sui_address

logger = get_logger(__name__)

CONFIG_DIR = Path(__file__).parent


def load_yaml(filename: str, config_dir: Path = CONFIG_DIR) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of file in config directory
        config_dir: Directory to read from

    Returns:
        Parsed YAML as dict
    """
    filepath = Path(config_dir) / filename
    if not filepath.exists():
        raise ConfigError(
            f"Config file not found: {filepath}",
            details={"path": str(filepath)},
        )

    with open(filepath, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_environment(env: str, config_dir: Path = CONFIG_DIR) -> Dict[str, Any]:
    """Load the packages/coins/pools file for an environment."""
    try:
        env_name = Environment(env).value
    except ValueError:
        raise ConfigError(
            f"Unknown environment: {env}",
            details={"env": env, "known": [e.value for e in Environment]},
        )
    return load_yaml(f"{env_name}.yaml", config_dir)


class DeepBookConfig:
    """
    Coin/pool resolver for one environment.

    Usage:
        config = DeepBookConfig("mainnet")
        await config.init()
        pool = config.get_pool("SUI_USDC")
    """

    def __init__(self, env: str = Environment.MAINNET.value, config_dir: Path = CONFIG_DIR):
        self.env = env
        self.config_dir = Path(config_dir)
        self._coins: Dict[str, Coin] = {}
        self._pools: Dict[str, Pool] = {}
        self._packages: Dict[str, str] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def init(self) -> None:
        """Load the environment file. Safe to call more than once."""
        if self._initialized:
            return

        raw = load_environment(self.env, self.config_dir)
        packages = raw.get("packages") or {}
        for required in ("deepbook", "registry"):
            if required not in packages:
                raise ConfigError(
                    f"Missing packages.{required} in {self.env}.yaml",
                    details={"env": self.env},
                )
        self._packages = {k: normalize_sui_address(v) for k, v in packages.items()}

        for key, coin in (raw.get("coins") or {}).items():
            self._add_coin_unchecked(key, coin["address"], coin["type"], int(coin["scalar"]))

        for key, pool in (raw.get("pools") or {}).items():
            self._add_pool_unchecked(key, pool["address"], pool["base_coin"], pool["quote_coin"])

        self._initialized = True
        logger.info(
            f"Loaded DeepBook config for {self.env}",
            extra={"context": {"coins": len(self._coins), "pools": len(self._pools)}},
        )

    def _require_init(self) -> None:
        if not self._initialized:
            raise ConfigError(
                "DeepBookConfig used before init()",
                code=ErrorCode.CONFIG_ERROR,
                details={"env": self.env},
            )

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_coin(self, key: str, address: str, coin_type: str, scalar: int) -> Coin:
        """Add or replace a coin."""
        self._require_init()
        return self._add_coin_unchecked(key, address, coin_type, scalar)

    def _add_coin_unchecked(self, key: str, address: str, coin_type: str, scalar: int) -> Coin:
        coin = Coin(
            key=key,
            address=normalize_sui_address(address),
            type=coin_type,
            scalar=scalar,
        )
        self._coins[key] = coin
        return coin

    def add_pool(self, key: str, address: str, base_coin: str, quote_coin: str) -> Pool:
        """Add or replace a pool; both coins must already be known."""
        self._require_init()
        return self._add_pool_unchecked(key, address, base_coin, quote_coin)

    def _add_pool_unchecked(self, key: str, address: str, base_coin: str, quote_coin: str) -> Pool:
        pool = Pool(
            key=key,
            address=normalize_sui_address(address),
            base_coin=self._coin(base_coin),
            quote_coin=self._coin(quote_coin),
        )
        self._pools[key] = pool
        return pool

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def _coin(self, key: str) -> Coin:
        coin = self._coins.get(key)
        if coin is None:
            raise NotFoundError(
                f"Coin with key {key} not found.",
                code=ErrorCode.COIN_NOT_FOUND,
                details={"coin_key": key, "env": self.env},
            )
        return coin

    def get_coin(self, key: str) -> Coin:
        self._require_init()
        return self._coin(key)

    def get_pool(self, key: str) -> Pool:
        self._require_init()
        pool = self._pools.get(key)
        if pool is None:
            raise NotFoundError(
                f"Pool with key {key} not found.",
                code=ErrorCode.POOL_NOT_FOUND,
                details={"pool_key": key, "env": self.env},
            )
        return pool

    @property
    def deepbook_package_id(self) -> str:
        self._require_init()
        return self._packages["deepbook"]

    @property
    def registry_id(self) -> str:
        self._require_init()
        return self._packages["registry"]

    @property
    def coin_keys(self) -> list[str]:
        return list(self._coins)

    @property
    def pool_keys(self) -> list[str]:
        return list(self._pools)

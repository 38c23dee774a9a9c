"""Gas price and gas limit management"""

import json
import logging
from pathlib import Path

from ..core.config import Config

logger = logging.getLogger(__name__)


class GasConfig:
    """Load and manage gas configuration from JSON file"""

    def __init__(self, config_path=None):
        """
        Load gas configuration from JSON file.

        Args:
            config_path: Path to gas_config.json (searches default locations if None)
        """
        self._config = self._load_config(config_path)

    def _load_config(self, config_path=None):
        """Load config from file or return defaults"""
        config_dir = Config.find_config_dir()
        search_paths = [
            config_path,
            Path.cwd() / "gas_config.json",
            config_dir / "gas_config.json" if config_dir else None,
        ]

        for path in search_paths:
            if path and Path(path).exists():
                with open(path) as f:
                    return json.load(f)

        return {
            "minGasPrice": None,
            "gasLimit": {},
        }

    @property
    def minGasPrice(self):
        """Gas price floor in sha (None = use the manager's)"""
        return self._config.get("minGasPrice")

    def getGasLimit(self, operation_type, default):
        """
        Get gas limit for operation type.

        Args:
            operation_type: Transaction type (e.g., "transfer", "mint", "deposit")
            default: Value used when the type is not configured

        Returns:
            Gas limit in units
        """
        gas_limits = self._config.get("gasLimit") or {}
        return gas_limits.get(operation_type, gas_limits.get("default", default))


class GasPriceAdvisor:
    """
    Gas price lookup with a configurable floor.

    The node's price is never trusted below the floor, and a failed lookup
    degrades to the manager's minimum gas price instead of raising.
    """

    def __init__(self, manager, config=None):
        """
        Args:
            manager: MoacManager instance
            config: GasConfig instance (created if None)
        """
        self.manager = manager
        self.config = config or GasConfig()

    @property
    def min_gas_price(self):
        """Config file override > manager setting"""
        if self.config.minGasPrice is not None:
            return int(self.config.minGasPrice)
        return int(self.manager.min_gas_price)

    def get_gas_price(self, floor=None):
        """
        Get the gas price to use for a transaction.

        Args:
            floor: Minimum acceptable price in sha (ignored if falsy)

        Returns:
            Gas price in sha as a decimal string
        """
        try:
            price = int(self.manager.get_gas_price())
        except Exception as e:
            price = self.min_gas_price
            logger.warning("gas price query failed, using %s: %s", price, e)

        if floor and price < int(floor):
            price = int(floor)
        return str(price)

    def get_gas_limit(self, operation_type=None):
        """Configured gas limit for an operation, else the manager default"""
        default = self.manager.gas_limit
        if not operation_type:
            return default
        return self.config.getGasLimit(operation_type, default)

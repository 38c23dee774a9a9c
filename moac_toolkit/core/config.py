"""Configuration loading and management"""

import os
import json
from pathlib import Path
from .exceptions import ConfigError


# Network ids used as chainId
MAINNET = 99
TESTNET = 101

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

DEFAULT_GAS_LIMIT = 200000
DEFAULT_MIN_GAS_PRICE = 20000000000

# Decimals of the native coin (1 MOAC = 10**18 sha)
MOAC_DECIMALS = 18


class Config:
    """Centralized configuration manager for shared settings"""

    _instance = None
    _tokens = None
    _abis = None

    # Contract ABIs ship inside the package
    PACKAGE_ABIS = Path(__file__).parent.parent / "abis.json"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Config._abis is None:
            self._load()

    @staticmethod
    def find_config_dir():
        """Find config directory, or None when no candidate exists"""
        env_path = os.getenv("MOAC_CONFIG_DIR")
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise ConfigError(f"MOAC_CONFIG_DIR does not exist: {env_path}")
            return path

        locations = [
            Path.cwd() / "config",
            Path.home() / ".moac-toolkit" / "config",
        ]

        for path in locations:
            if path.exists():
                return path
        return None

    def _load(self):
        """Load packaged ABIs and the optional token list"""
        if not self.PACKAGE_ABIS.exists():
            raise ConfigError(f"Shared ABIs not found: {self.PACKAGE_ABIS}")
        with open(self.PACKAGE_ABIS) as f:
            Config._abis = json.load(f)

        Config._tokens = {}
        config_dir = self.find_config_dir()
        if config_dir is not None:
            tokens_path = config_dir / "tokens.json"
            if tokens_path.exists():
                with open(tokens_path) as f:
                    Config._tokens = json.load(f)

    @property
    def common_tokens(self):
        """Common token symbol -> address mapping"""
        return Config._tokens or {}

    def get_abi(self, name):
        """Get ABI by name ("erc20", "erc721", "fingate")"""
        if name in Config._abis:
            return Config._abis[name]
        raise ConfigError(f"ABI not found: {name}")

    def get_token_address(self, symbol_or_address):
        """Resolve token symbol to address, or pass an address through"""
        token = symbol_or_address.upper()

        if token in self.common_tokens:
            return self.common_tokens[token]

        stripped = symbol_or_address[2:] if symbol_or_address.startswith("0x") else symbol_or_address
        if len(stripped) == 40:
            return symbol_or_address

        raise ConfigError(f"Unknown token: {symbol_or_address}")


def env_flag(name, default=True):
    """Read a boolean environment variable"""
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "mainnet")


def env_int(name, default):
    """Read an integer environment variable"""
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")

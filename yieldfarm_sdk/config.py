"""
Network configuration for the yield-farming SDK.

Known networks ship in ``networks.json``; any value can be overridden by an
explicit argument or an environment variable named after the network, e.g.
``SEPOLIA_RPC_URL`` or ``SEPOLIA_POOL_ADDRESS``.
"""
import json
import logging
import os
from importlib import resources
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class NetworkConfig:
    """Lookup of RPC endpoints, chain ids and pool addresses by network name."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load the packaged network definitions

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is None:
            text = resources.files("yieldfarm_sdk").joinpath("networks.json").read_text(encoding="utf-8")
            cls._networks_cache = json.loads(text)
            logger.debug(f"Loaded {len(cls._networks_cache)} network definitions")
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the configuration of one network

        Raises:
            ConfigurationError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ConfigurationError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @staticmethod
    def _env_name(network: str, suffix: str) -> str:
        return f"{network.upper().replace('-', '_')}_{suffix}"

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        """Get the RPC URL: explicit override, then environment, then networks.json"""
        if override:
            return override
        env_value = os.environ.get(cls._env_name(network, "RPC_URL"))
        if env_value:
            return env_value
        return cls.get_network(network)["rpc"]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_pool_address(cls, network: str, override: Optional[str] = None) -> str:
        """
        Get the yield pool address: explicit override, then environment, then networks.json

        Raises:
            ConfigurationError: If no address is configured for the network
        """
        if override:
            return override
        env_name = cls._env_name(network, "POOL_ADDRESS")
        env_value = os.environ.get(env_name)
        if env_value:
            return env_value
        address = cls.get_network(network).get("yieldPool")
        if not address:
            raise ConfigurationError(
                f"No yield pool address configured for '{network}'; pass one explicitly or set {env_name}"
            )
        return address

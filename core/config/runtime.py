"""
Runtime Configuration

Central configuration for hashing, leaf encoding and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import asdict, dataclass
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import (
    DEFAULT_ALGORITHM,
    DEFAULT_ENCODING,
    SUPPORTED_ENCODINGS,
    get_hash_function,
    normalize_algorithm,
)
from core.schemas.errors import ErrorCodes, MerkleException

load_dotenv()


ENV_PREFIX = "MERKLE_"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (MERKLE_* prefix, .env honoured)
    - A dictionary (e.g. parsed JSON config file)
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_ALGORITHM
    leaf_encoding: str = DEFAULT_ENCODING
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> "RuntimeConfig":
        """
        Check that the algorithm and encoding are usable.

        Raises:
            MerkleException: With code CONFIG_ERROR
        """
        try:
            get_hash_function(self.hash_algorithm)
        except MerkleException as e:
            raise MerkleException(
                message=f"Invalid hash_algorithm in config: {self.hash_algorithm!r}",
                code=ErrorCodes.CONFIG_ERROR,
                details=e.details,
            ) from e
        self.hash_algorithm = normalize_algorithm(self.hash_algorithm)
        if self.leaf_encoding not in SUPPORTED_ENCODINGS:
            raise MerkleException(
                message=f"Invalid leaf_encoding in config: {self.leaf_encoding!r}",
                code=ErrorCodes.CONFIG_ERROR,
                details={"supported": list(SUPPORTED_ENCODINGS)},
            )
        return self

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: sha256, sha512, sha3_256, blake2b, blake2s
        - MERKLE_LEAF_ENCODING: utf8 or canonical_json
        - MERKLE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR
        - MERKLE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        for key in ("hash_algorithm", "leaf_encoding", "log_level", "log_file"):
            value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if value:
                overrides[key] = value

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        defaults = cls()
        return cls(
            hash_algorithm=data.get("hash_algorithm", defaults.hash_algorithm),
            leaf_encoding=data.get("leaf_encoding", defaults.leaf_encoding),
            log_level=data.get("log_level", defaults.log_level),
            log_file=data.get("log_file", defaults.log_file),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        return new_config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

"""
Configuration for flatmerkle.

Defines the default node hash, logging and benchmark parameters. Values can
come from a dotenv file and ``FLATMERKLE_*`` environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import dotenv_values, find_dotenv

from flatmerkle.crypto import DEFAULT_HASH_ALGORITHM, NODE_HASHES

ENV_PREFIX = "FLATMERKLE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class MerkleConfig:
    """Library-wide configuration parameters"""

    # Hashing
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM  # Node hash used by the facade and CLI

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    log_to_file: bool = False

    # Benchmarks
    benchmark_sizes: Tuple[int, ...] = field(default=(100, 1_000, 10_000))

    def __post_init__(self):
        """Normalize and validate values"""
        self.hash_algorithm = self.hash_algorithm.lower()
        if self.hash_algorithm not in NODE_HASHES:
            raise ValueError(
                f"Unknown hash algorithm {self.hash_algorithm!r}, "
                f"expected one of {sorted(NODE_HASHES)}"
            )

        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.log_level!r}")

        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir)

        if any(size < 1 for size in self.benchmark_sizes):
            raise ValueError("Benchmark sizes must be positive")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(config_path: Optional[str] = None) -> MerkleConfig:
    """
    Load configuration from a dotenv file and the environment.

    Variables already set in the environment win over the file. The file
    is read without being exported into os.environ.

    Args:
        config_path: Optional path to a dotenv file. If None, a .env file
            is searched for from the current directory upwards.

    Returns:
        MerkleConfig instance
    """
    path = config_path or find_dotenv(usecwd=True)
    env = {}
    if path:
        env.update({k: v for k, v in dotenv_values(path).items() if v is not None})
    env.update(os.environ)

    kwargs = {}
    if f"{ENV_PREFIX}HASH" in env:
        kwargs["hash_algorithm"] = env[f"{ENV_PREFIX}HASH"]
    if f"{ENV_PREFIX}LOG_LEVEL" in env:
        kwargs["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"]
    if f"{ENV_PREFIX}LOG_DIR" in env:
        kwargs["log_dir"] = Path(env[f"{ENV_PREFIX}LOG_DIR"])
    if f"{ENV_PREFIX}LOG_TO_FILE" in env:
        kwargs["log_to_file"] = _env_bool(env[f"{ENV_PREFIX}LOG_TO_FILE"])
    if f"{ENV_PREFIX}BENCH_SIZES" in env:
        raw = env[f"{ENV_PREFIX}BENCH_SIZES"]
        try:
            kwargs["benchmark_sizes"] = tuple(int(s) for s in raw.split(",") if s.strip())
        except ValueError:
            raise ValueError(f"Invalid {ENV_PREFIX}BENCH_SIZES: {raw!r}") from None

    return MerkleConfig(**kwargs)

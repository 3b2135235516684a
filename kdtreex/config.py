from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict

import numpy as np

_LOGGER = logging.getLogger("kdtreex")

_SUPPORTED_PRECISION = {"float32", "float64"}
_NONPOSITIVE_K_POLICIES = {"empty", "raise"}
_DEFAULT_NONPOSITIVE_K_POLICY = "empty"


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _normalise_precision(value: str | None) -> str:
    if value is None:
        return "float64"
    value = value.strip().lower()
    if value not in _SUPPORTED_PRECISION:
        raise ValueError(f"Unsupported precision '{value}'. Expected one of {_SUPPORTED_PRECISION}.")
    return value


def _parse_nonpositive_k(value: str | None) -> str:
    if value is None:
        return _DEFAULT_NONPOSITIVE_K_POLICY
    policy = value.strip().lower()
    if policy not in _NONPOSITIVE_K_POLICIES:
        raise ValueError(
            f"Unsupported k<=0 policy '{policy}'. Expected one of {_NONPOSITIVE_K_POLICIES}."
        )
    return policy


@dataclass(frozen=True)
class RuntimeConfig:
    precision: str
    enable_diagnostics: bool
    log_level: str
    nonpositive_k: str

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.precision)

    @property
    def raise_on_nonpositive_k(self) -> bool:
        return self.nonpositive_k == "raise"

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        precision = _normalise_precision(os.getenv("KDTREEX_PRECISION"))
        enable_diagnostics = _bool_from_env(
            os.getenv("KDTREEX_ENABLE_DIAGNOSTICS"), default=True
        )
        log_level = os.getenv("KDTREEX_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        nonpositive_k = _parse_nonpositive_k(os.getenv("KDTREEX_NONPOSITIVE_K"))
        return cls(
            precision=precision,
            enable_diagnostics=enable_diagnostics,
            log_level=log_level,
            nonpositive_k=nonpositive_k,
        )


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("kdtreex")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    config = RuntimeConfig.from_env()
    _configure_logging(config.log_level)
    _LOGGER.debug("Runtime configuration loaded: %s", config)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()


def describe_runtime() -> Dict[str, Any]:
    """Return a serialisable view of the active runtime configuration."""

    config = runtime_config()
    return {
        "precision": config.precision,
        "enable_diagnostics": config.enable_diagnostics,
        "log_level": config.log_level,
        "nonpositive_k": config.nonpositive_k,
    }

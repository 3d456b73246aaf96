"""
dfmkit Config - Default Settings for DFM Operations

Holds the defaults that operations fall back to when a caller leaves an
argument unset (verbosity of trimming, random seed, top-feature summary
parameters). Values can be changed globally or overridden for a block of
code with ``config.local(...)``.

Environment:
    DFMKIT_QUIET: "1", "true" or "yes" turns progress reporting off.
    DFMKIT_SEED: Integer default seed for randomized operations.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("dfmkit.config")


# =============================================================================
# Environment
# =============================================================================

def _env_quiet() -> bool:
    return os.environ.get("DFMKIT_QUIET", "").lower() in ("1", "true", "yes")


def _env_seed() -> Optional[int]:
    raw = os.environ.get("DFMKIT_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer DFMKIT_SEED={raw!r}")
        return None


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class ReportConfig:
    """Configuration for progress reporting."""
    verbose: bool = True


@dataclass
class RandomConfig:
    """Configuration for randomized operations."""
    seed: Optional[int] = None     # None = fresh OS entropy


@dataclass
class SummaryConfig:
    """Configuration for frequency summaries."""
    n: int = 10
    ci: float = 0.95


def _default_report() -> ReportConfig:
    return ReportConfig(verbose=not _env_quiet())


def _default_random() -> RandomConfig:
    return RandomConfig(seed=_env_seed())


# =============================================================================
# Global Configuration Manager
# =============================================================================

class DfmConfig:
    """
    Global configuration manager for dfmkit.

    Provides thread-local configuration with context manager support.

    Example:
        # Global configuration
        dfmkit.config.report = ReportConfig(verbose=False)

        # Local configuration (context manager)
        with dfmkit.config.local(random=RandomConfig(seed=1)):
            sampled = dfmkit.sample_dfm(x)
    """

    def __init__(self):
        self._global_report = _default_report()
        self._global_random = _default_random()
        self._global_summary = SummaryConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

        self._callbacks: Dict[str, List[Callable]] = {
            "report": [],
            "random": [],
            "summary": [],
        }

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def report(self) -> ReportConfig:
        """Get report configuration."""
        if getattr(self._local, "report", None) is not None:
            return self._local.report
        return self._global_report

    @report.setter
    def report(self, value: ReportConfig):
        self._global_report = value
        self._notify("report", value)

    @property
    def random(self) -> RandomConfig:
        """Get random configuration."""
        if getattr(self._local, "random", None) is not None:
            return self._local.random
        return self._global_random

    @random.setter
    def random(self, value: RandomConfig):
        self._global_random = value
        self._notify("random", value)

    @property
    def summary(self) -> SummaryConfig:
        """Get summary configuration."""
        if getattr(self._local, "summary", None) is not None:
            return self._local.summary
        return self._global_summary

    @summary.setter
    def summary(self, value: SummaryConfig):
        self._global_summary = value
        self._notify("summary", value)

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def verbose(self) -> bool:
        """Whether operations report progress by default."""
        return self.report.verbose

    @verbose.setter
    def verbose(self, value: bool):
        self._global_report.verbose = value

    @property
    def seed(self) -> Optional[int]:
        """Default seed for randomized operations."""
        return self.random.seed

    @seed.setter
    def seed(self, value: Optional[int]):
        self._global_random.seed = value

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (report, random, summary)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - set(self._callbacks)
        if unknown:
            raise TypeError(f"Unknown configuration section(s): {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)

    def _clear_local(self, keys: List[str]):
        for key in keys:
            if hasattr(self._local, key):
                setattr(self._local, key, None)

    # -------------------------------------------------------------------------
    # Callback Registration
    # -------------------------------------------------------------------------

    def on_change(self, config_name: str, callback: Callable):
        """
        Register callback for configuration changes.

        Args:
            config_name: Name of config ("report", "random", "summary")
            callback: Function to call with the new value
        """
        if config_name in self._callbacks:
            self._callbacks[config_name].append(callback)

    def _notify(self, config_name: str, value: Any):
        for callback in self._callbacks.get(config_name, []):
            try:
                callback(value)
            except Exception as e:
                logger.warning(f"Config callback for '{config_name}' failed: {e}")

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults (re-reading the environment)."""
        self._global_report = _default_report()
        self._global_random = _default_random()
        self._global_summary = SummaryConfig()

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "report": {"verbose": self.report.verbose},
            "random": {"seed": self.random.seed},
            "summary": {"n": self.summary.n, "ci": self.summary.ci},
        }

    def __repr__(self) -> str:
        return f"DfmConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: DfmConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._keys = list(kwargs.keys())

    def __enter__(self):
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._clear_local(self._keys)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = DfmConfig()


def get_config() -> DfmConfig:
    """Get the global configuration instance."""
    return config


def set_verbose(enabled: bool = True):
    """Enable or disable progress reporting globally."""
    config.verbose = enabled


def set_seed(seed: Optional[int] = None):
    """Set the default seed used by randomized operations."""
    config.seed = seed


__all__ = [
    "ReportConfig",
    "RandomConfig",
    "SummaryConfig",
    "DfmConfig",
    "config",
    "get_config",
    "set_verbose",
    "set_seed",
]

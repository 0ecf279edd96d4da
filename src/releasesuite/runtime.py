"""Runtime helpers for releasesuite CLI orchestration."""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from releasesuite.config import CONFIG_DEFAULT, SuiteConfig, default_config, load_config
from releasesuite.errors import classify_error
from releasesuite.logging import configure_logging, get_logger
from releasesuite.ux import print_error


class _HandlerCallable(Protocol):
    def __call__(self) -> Any: ...


def prepare_config(
    args: Any, *, loader: Callable[[str], SuiteConfig] = load_config
) -> SuiteConfig:
    """Load the config named by ``args.config``.

    A missing default config file is not an error: the defaults rooted at the
    working directory apply. An explicitly named file must exist.
    """
    config_path = getattr(args, "config", CONFIG_DEFAULT)
    if config_path == CONFIG_DEFAULT and not Path(config_path).exists():
        cfg = default_config()
    else:
        cfg = loader(config_path)
    level = "WARNING" if getattr(args, "quiet", False) else cfg.logging_level
    if getattr(args, "verbose", False):
        level = "DEBUG"
    configure_logging(json_logging=cfg.logging_json_enabled, level=level)
    return cfg


def execute_command(handler: _HandlerCallable, command: str) -> int:
    """Run a command handler, timing it and turning failures into exit code 1."""
    logger = get_logger()
    start = time.perf_counter()
    try:
        result = handler()
    except Exception as exc:
        info = classify_error(exc)
        logger.log_error(
            f"command {command} failed", error=info.message, category=info.category
        )
        print_error(f"{command}: [{info.category}] {info.message}")
        return 1
    exit_code = int(result) if result is not None else 0
    logger.log_performance(
        f"cli_{command}", (time.perf_counter() - start) * 1000, exit_code=exit_code
    )
    return exit_code


__all__ = ["prepare_config", "execute_command"]

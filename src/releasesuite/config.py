from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

try:
    import yaml
except Exception:  # pragma: no cover
    yaml = cast(Any, None)

CONFIG_DEFAULT = 'release_suite.config.yaml'


class ConfigError(RuntimeError):
    pass


@dataclass
class SuiteConfig:
    version: int
    source_file: Path
    export_json: Path
    payload_json: Path
    store_file: Path
    # Logging configuration
    logging_json_enabled: bool
    logging_level: str


def _resolve_env_var(value: Any) -> Any:
    """Resolve environment variable if value starts with $."""
    if isinstance(value, str) and value.startswith('$'):
        return os.getenv(value[1:], value)  # Fallback to original if not found
    return value


def default_config(base: Path | None = None) -> SuiteConfig:
    root = base or Path.cwd()
    return SuiteConfig(
        version=1,
        source_file=root / 'RELEASE_NOTES.txt',
        export_json=root / 'release_notes_parsed.json',
        payload_json=root / 'release_notes_payloads.json',
        store_file=root / '.releasesuite' / 'store.json',
        logging_json_enabled=False,
        logging_level='INFO',
    )


def load_config(path: str | Path) -> SuiteConfig:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f'Configuration file not found: {p}')
    if yaml is None:
        raise ConfigError('PyYAML not installed; pip install PyYAML')
    try:
        loaded: Any = yaml.safe_load(p.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f'Invalid YAML in {p}: {exc}') from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f'Configuration {p} must be a mapping')
    raw = cast(dict[str, Any], loaded)
    src = cast(dict[str, Any], raw.get('source', {}) or {})
    out = cast(dict[str, Any], raw.get('output', {}) or {})
    store = cast(dict[str, Any], raw.get('store', {}) or {})
    logging_config = cast(dict[str, Any], raw.get('logging', {}) or {})

    base = p.parent
    return SuiteConfig(
        version=int(raw.get('version', 1)),
        source_file=base / _resolve_env_var(src.get('file', 'RELEASE_NOTES.txt')),
        export_json=base / _resolve_env_var(out.get('export_json', 'release_notes_parsed.json')),
        payload_json=base / _resolve_env_var(out.get('payload_json', 'release_notes_payloads.json')),
        store_file=base / _resolve_env_var(store.get('file', '.releasesuite/store.json')),
        logging_json_enabled=bool(logging_config.get('json_enabled', False)),
        logging_level=str(logging_config.get('level', 'INFO')),
    )


__all__ = ['CONFIG_DEFAULT', 'ConfigError', 'SuiteConfig', 'default_config', 'load_config']

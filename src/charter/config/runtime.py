"""Runtime configuration for the receiver logger."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import yaml


@dataclass(slots=True)
class CharterConfig:
    """
    Serial link and output settings.

    The defaults match the receiver's factory configuration (115200 baud,
    8N1) with a one second read timeout.
    """

    port: Optional[str] = None
    baudrate: int = 115200
    timeout_s: float = 1.0
    read_size: int = 1024

    output: Optional[Path] = None
    create: bool = False
    histogram_dir: Optional[Path] = None
    histogram_prefix: str = "histogram"

    debug: bool = False

    def sanitized(self) -> CharterConfig:
        """Return a copy with derived limits applied."""
        return CharterConfig(
            port=str(self.port) if self.port else None,
            baudrate=max(1, int(self.baudrate)),
            timeout_s=max(0.01, float(self.timeout_s)),
            read_size=max(1, int(self.read_size)),
            output=Path(self.output) if self.output else None,
            create=bool(self.create),
            histogram_dir=Path(self.histogram_dir) if self.histogram_dir else None,
            histogram_prefix=str(self.histogram_prefix or "histogram"),
            debug=bool(self.debug),
        )

    def with_overrides(self, **overrides: Any) -> CharterConfig:
        """Return a sanitized copy with every non-``None`` override applied."""
        payload = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **payload).sanitized()


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`CharterConfig`."""
    return {f.name for f in fields(CharterConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten known nesting patterns (e.g. top-level ``serial`` key)."""
    if "serial" in data and isinstance(data["serial"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "serial":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> CharterConfig:
    """Build :class:`CharterConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return CharterConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    try:
        return CharterConfig(**payload).sanitized()
    except (TypeError, ValueError) as exc:
        # e.g. `timeout_s:` with no value loads as None
        raise ValueError(f"Invalid configuration value: {exc}") from exc


def load_config(path: str | Path | None) -> CharterConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`CharterConfig`.
    """
    if path is None:
        return CharterConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return CharterConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse {cfg_path}: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["CharterConfig", "config_from_mapping", "load_config"]

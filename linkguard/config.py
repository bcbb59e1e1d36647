"""Configuration loading for linkguard (.linkguard.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .models import UrlSpace
from .scan.options import DEFAULT_PRESET, ScanOptions
from .validate import MarkdownConfig, ValidateConfig
from .validate.external import DEFAULT_TIMEOUT

CONFIG_FILENAME = ".linkguard.yml"
_RELATIVE_PATH_MODES = {"exists", "as-url"}


@dataclass
class ScanSection:
    """Route discovery settings."""

    preset: str = DEFAULT_PRESET
    cwd: Optional[Path] = None
    pages: Optional[List[str]] = None
    extensions: Optional[List[str]] = None
    populate: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    meta: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    router_config: Optional[List[Dict[str, Any]]] = None


@dataclass
class ValidateSection:
    """Link checking switches."""

    base_url: Optional[str] = None
    base_dir: Optional[str] = None
    ignore_fragment: bool = False
    ignore_query: bool = False
    check_external: bool = False
    check_relative_paths: Any = False
    check_relative_urls: bool = True
    whitelist: List[str] = field(default_factory=list)
    external_timeout: float = DEFAULT_TIMEOUT
    components: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class LinkGuardConfig:
    """Represents the settings defined in .linkguard.yml."""

    root: Path
    files: List[str] = field(default_factory=list)
    scan: ScanSection = field(default_factory=ScanSection)
    validate: ValidateSection = field(default_factory=ValidateSection)

    def to_scan_options(self) -> ScanOptions:
        cwd = self.scan.cwd if self.scan.cwd is not None else self.root
        return ScanOptions(
            preset=self.scan.preset,
            pages=self.scan.pages,
            cwd=cwd,
            populate=self.scan.populate,
            meta=self.scan.meta,
            extensions=self.scan.extensions,
            router_config=self.scan.router_config,
        )

    def to_validate_config(self, scanned: UrlSpace) -> ValidateConfig:
        section = self.validate
        return ValidateConfig(
            scanned=scanned,
            base_url=section.base_url,
            base_dir=section.base_dir,
            ignore_fragment=section.ignore_fragment,
            ignore_query=section.ignore_query,
            check_external=section.check_external,
            check_relative_paths=section.check_relative_paths,
            check_relative_urls=section.check_relative_urls,
            whitelist=list(section.whitelist) or None,
            markdown=MarkdownConfig(components=dict(section.components)),
            external_timeout=section.external_timeout,
        )


def load_config(config_path: Path) -> LinkGuardConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return LinkGuardConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scan_data = _as_dict(data.get("scan"))
    cwd = _as_str(scan_data.get("cwd"))
    pages = scan_data.get("pages")
    extensions = scan_data.get("extensions")
    router_config = scan_data.get("router_config")
    if router_config is not None and not isinstance(router_config, list):
        raise ConfigError("scan.router_config must be a list of route entries")
    scan = ScanSection(
        preset=_as_str(scan_data.get("preset")) or DEFAULT_PRESET,
        cwd=(root / cwd) if cwd else None,
        pages=_as_str_list(pages) if pages is not None else None,
        extensions=_as_str_list(extensions) if extensions is not None else None,
        populate=_as_populate(scan_data.get("populate")),
        meta={str(key): _as_dict(value) for key, value in _as_dict(scan_data.get("meta")).items()},
        router_config=router_config,
    )

    validate_data = _as_dict(data.get("validate"))
    validate = ValidateSection(
        base_url=_as_str(validate_data.get("base_url")),
        base_dir=_as_str(validate_data.get("base_dir")),
        ignore_fragment=_as_bool(validate_data.get("ignore_fragment")) or False,
        ignore_query=_as_bool(validate_data.get("ignore_query")) or False,
        check_external=_as_bool(validate_data.get("check_external")) or False,
        check_relative_paths=_as_relative_path_mode(validate_data.get("check_relative_paths")),
        check_relative_urls=_default_true(_as_bool(validate_data.get("check_relative_urls"))),
        whitelist=_as_str_list(validate_data.get("whitelist")),
        external_timeout=_as_float(validate_data.get("external_timeout")) or DEFAULT_TIMEOUT,
        components={
            str(name): _as_str_list(value.get("attributes") if isinstance(value, dict) else value)
            for name, value in _as_dict(validate_data.get("components")).items()
        },
    )

    return LinkGuardConfig(
        root=root,
        files=_as_str_list(data.get("files")),
        scan=scan,
        validate=validate,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_populate(value: Any) -> Dict[str, List[Dict[str, Any]]]:
    result: Dict[str, List[Dict[str, Any]]] = {}
    for key, entries in _as_dict(value).items():
        if not isinstance(entries, list):
            raise ConfigError(f"populate entries for '{key}' must be a list")
        result[str(key)] = [_as_dict(entry) for entry in entries]
    return result


def _as_relative_path_mode(value: Any) -> Any:
    if value is None or value is False:
        return False
    if isinstance(value, str) and value in _RELATIVE_PATH_MODES:
        return value
    if isinstance(value, str) and value.strip().lower() in {"false", "no", "off"}:
        return False
    raise ConfigError("validate.check_relative_paths must be 'exists', 'as-url' or false")


def _default_true(value: Optional[bool]) -> bool:
    return True if value is None else value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "LinkGuardConfig",
    "ScanSection",
    "ValidateSection",
    "load_config",
]

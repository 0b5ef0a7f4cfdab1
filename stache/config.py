from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import DataFormatError, ResourceAccessError
from .template.partials import DEFAULT_PARTIAL_SUFFIX

DEFAULT_CFG_FILE = "stache.yaml"

# --------------------------------------------------------------------------- #
# ДЕФОЛТЫ
# --------------------------------------------------------------------------- #
_DEFAULT_CFG: Dict[str, Any] = {
    # None -> каталог рендеримого шаблона
    "partials_dir": None,
    "partial_suffix": DEFAULT_PARTIAL_SUFFIX,
    # gitignore-шаблоны partial-файлов, которые не должны подключаться
    "exclude": [],
}

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class StacheConfig:
    partials_dir: Optional[Path] = None
    partial_suffix: str = DEFAULT_PARTIAL_SUFFIX
    exclude: List[str] = field(default_factory=list)


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _merge_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Накладываем значения пользователя поверх дефолтов."""
    cfg = _DEFAULT_CFG.copy()
    cfg.update(raw)                      # пользовательские ключи перекрывают
    return cfg


def _validate(cfg: Dict[str, Any], path: Path) -> None:
    unknown = set(cfg) - set(_DEFAULT_CFG)
    if unknown:
        raise DataFormatError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")

    if cfg["partials_dir"] is not None and not isinstance(cfg["partials_dir"], str):
        raise DataFormatError(f"{path}: 'partials_dir' must be a string")
    if not isinstance(cfg["partial_suffix"], str):
        raise DataFormatError(f"{path}: 'partial_suffix' must be a string")
    exclude = cfg["exclude"]
    if not isinstance(exclude, list) or not all(isinstance(p, str) for p in exclude):
        raise DataFormatError(f"{path}: 'exclude' must be a list of strings")


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_config(path: Path) -> StacheConfig:
    """
    Загрузить stache.yaml.

    • Если файла нет: вернуть дефолты.
    • Относительный partials_dir разрешается от каталога конфига.
    • Неизвестные ключи и неверные типы: DataFormatError.
    """
    if not path.exists():
        return StacheConfig()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResourceAccessError(f"Failed to read config {path}: {e}", path) from e

    try:
        raw = _yaml.load(text) or {}
    except YAMLError as e:
        raise DataFormatError(f"Invalid YAML in config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise DataFormatError(f"Config must be a mapping: {path}")

    cfg = _merge_defaults(raw)
    _validate(cfg, path)

    partials_dir = None
    if cfg["partials_dir"] is not None:
        partials_dir = (path.parent / cfg["partials_dir"]).resolve()

    return StacheConfig(
        partials_dir=partials_dir,
        partial_suffix=cfg["partial_suffix"],
        exclude=list(cfg["exclude"]),
    )


def find_config(start: Path) -> Path:
    """Путь к stache.yaml в каталоге start (файла может и не быть)."""
    return start / DEFAULT_CFG_FILE


__all__ = ["StacheConfig", "load_config", "find_config", "DEFAULT_CFG_FILE"]

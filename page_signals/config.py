# === FILE: page_signals/config.py ===
"""
Модуль для загрузки и валидации конфигурации анализатора PageSignals.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from page_signals.parser.main_content import BOILERPLATE_SELECTORS, MAIN_SELECTORS
from page_signals.parser.structured_data import DEFAULT_MAX_DEPTH


class AnalyzerConfig(BaseModel):
    """Конфигурация одного запуска анализа страницы."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(10.0, gt=0, description="Таймаут на весь анализ (секунд).")
    user_agent: str = Field("PageSignalsBot/1.0", min_length=1, description="Заголовок User-Agent.")
    main_selectors: Tuple[str, ...] = Field(
        MAIN_SELECTORS, description="Селекторы основного контента в порядке приоритета."
    )
    boilerplate_selectors: Tuple[str, ...] = Field(
        BOILERPLATE_SELECTORS, description="Селекторы шаблонных блоков (меню, футер, реклама)."
    )
    max_jsonld_depth: int = Field(
        DEFAULT_MAX_DEPTH, ge=1, description="Максимальная глубина обхода JSON-LD."
    )

    @field_validator("main_selectors", "boilerplate_selectors", mode="before")
    def _clean_selectors(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            cleaned = [s.strip() for s in v if isinstance(s, str) and s.strip()]
            if len(cleaned) != len(v):
                raise ValueError("селекторы должны быть непустыми строками")
            return tuple(cleaned)
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> AnalyzerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AnalyzerConfig.
    Без пути берёт configs/default.yaml, а если его нет, то значения по умолчанию.
    Явно указанный, но отсутствующий файл даёт FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return AnalyzerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return AnalyzerConfig(**data)

"""Validated, immutable configuration.

Options keep the camelCase names used in check configuration files, e.g.::

    checks = ["annotation-gap", "missing-documentation"]

    [missing-documentation]
    minLineCount = 2
    accessModifiers = ["public", "protected"]
    ignoreClassNameRegex = ".*Test"
"""

from __future__ import annotations

import logging
import os
import re
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from diffscope.core.languages import DEFAULT_EXTENSIONS, normalize_extensions
from diffscope.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DIFFSCOPE_CONFIG"
DEFAULT_CONFIG_FILE = "diffscope.toml"


class AccessLevel(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PACKAGE = "package"
    PRIVATE = "private"

    @classmethod
    def _missing_(cls, value: object) -> AccessLevel | None:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in ("package-private", "package_private", "default"):
                return cls.PACKAGE
            for member in cls:
                if member.value == normalized:
                    return member
        return None


ALL_ACCESS_LEVELS = frozenset(AccessLevel)


def _split_list(value: Any) -> Any:
    """Accept ``"a, b"`` as well as real lists."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class MissingDocumentationOptions(_Options):
    ignore_class_name_regex: re.Pattern[str] | None = Field(default=None, alias="ignoreClassNameRegex")
    min_line_count: int = Field(default=-1, alias="minLineCount")
    allow_missing_property_javadoc: bool = Field(default=False, alias="allowMissingPropertyJavadoc")
    allowed_annotations: frozenset[str] = Field(default=frozenset(), alias="allowedAnnotations")
    access_modifiers: frozenset[AccessLevel] = Field(default=ALL_ACCESS_LEVELS, alias="accessModifiers")
    file_extensions: tuple[str, ...] = Field(default=DEFAULT_EXTENSIONS, alias="fileExtensions")
    enabled_git: bool = Field(default=True, alias="enabledGit")
    changed_file_set: frozenset[str] | None = Field(default=None, alias="changedFileSet")
    main_branch: str = Field(default="main", alias="mainBranch", min_length=1)

    @field_validator("allowed_annotations", "changed_file_set", mode="before")
    @classmethod
    def _split(cls, value: Any) -> Any:
        return _split_list(value)

    @field_validator("access_modifiers", mode="before")
    @classmethod
    def _parse_access_levels(cls, value: Any) -> Any:
        value = _split_list(value)
        if value is None:
            return value
        return [item if isinstance(item, AccessLevel) else AccessLevel(item) for item in value]

    @field_validator("allowed_annotations", mode="after")
    @classmethod
    def _drop_empty_annotations(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(name.strip().lstrip("@") for name in value if name.strip())

    @field_validator("file_extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Extensions array can not be null")
        return normalize_extensions(_split_list(value))

    @model_validator(mode="after")
    def _require_allowlist_without_git(self) -> MissingDocumentationOptions:
        if not self.enabled_git and self.changed_file_set is None:
            raise ValueError("changedFileSet must be supplied when enabledGit is false")
        return self


class LongMethodOptions(_Options):
    max: int = Field(default=150, ge=0)
    class_name_regex: re.Pattern[str] = Field(default=re.compile(".*"), alias="classNameRegex")


CHECK_NAMES = (
    "annotation-gap",
    "trailing-blank-line",
    "intermediate-blank-run",
    "missing-documentation",
    "long-method-documentation",
)
DEFAULT_CHECKS = CHECK_NAMES[:4]


class DiffscopeConfig(_Options):
    checks: tuple[str, ...] = DEFAULT_CHECKS
    jobs: int = Field(default=1, ge=1)
    missing_documentation: MissingDocumentationOptions = Field(
        default_factory=MissingDocumentationOptions, alias="missing-documentation"
    )
    long_method: LongMethodOptions = Field(default_factory=LongMethodOptions, alias="long-method-documentation")

    @field_validator("checks", mode="before")
    @classmethod
    def _split_checks(cls, value: Any) -> Any:
        return _split_list(value)

    @field_validator("checks", mode="after")
    @classmethod
    def _known_checks(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        unknown = sorted(set(value) - set(CHECK_NAMES))
        if unknown:
            raise ValueError(f"Unknown check(s) {unknown}. Known: {list(CHECK_NAMES)}")
        return tuple(dict.fromkeys(value))


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def build_config(data: dict[str, Any] | None = None, **overrides: Any) -> DiffscopeConfig:
    """Validate a raw mapping (e.g. parsed TOML) into a :class:`DiffscopeConfig`.

    ``overrides`` are merged into the ``missing-documentation`` section; a
    ``None`` override is ignored.
    """
    raw: dict[str, Any] = dict(data or {})
    section_overrides = {k: v for k, v in overrides.items() if v is not None}
    if section_overrides:
        section = dict(raw.get("missing-documentation") or raw.get("missing_documentation") or {})
        raw.pop("missing_documentation", None)
        section.update(section_overrides)
        raw["missing-documentation"] = section
    try:
        return DiffscopeConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {_format_validation_error(exc)}") from exc


def resolve_config_path(explicit: str | Path | None = None) -> Path | None:
    if explicit:
        return Path(explicit)
    from_env = os.getenv(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    default = Path(DEFAULT_CONFIG_FILE)
    return default if default.is_file() else None


def load_config(path: str | Path | None = None, **overrides: Any) -> DiffscopeConfig:
    config_path = resolve_config_path(path)
    data: dict[str, Any] = {}
    if config_path is not None:
        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"Can't read configuration file {config_path}: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid TOML in {config_path}: {exc}") from exc
        logger.debug("Loaded configuration from %s", config_path)
    return build_config(data, **overrides)

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "symdef.toml"

DEFAULT_LANGUAGES: tuple[str, ...] = ("python", "typescript", "javascript")

DEFAULT_EXTENSIONS: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}


class SymdefConfig(BaseModel):
    """Configuration for providers, the CLI and tree extraction."""

    model_config = ConfigDict(extra="forbid")

    languages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LANGUAGES),
        description="Language ids providers bind and tree extraction scans",
    )
    include_builtins: bool = Field(
        default=False,
        description="Passed to analyzers that understand language builtins",
    )
    extensions: dict[str, str] = Field(
        default_factory=dict,
        description="Extra file suffix -> language id mappings",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all supported)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    output: str = Field(
        default="definitions.jsonl",
        description="Tree extraction output path, relative to the root",
    )

    @field_validator("extensions", mode="before")
    @classmethod
    def validate_extensions(cls, v: Any) -> Any:
        """Require ``.suffix = "language-id"`` string pairs."""
        if v is None:
            return {}

        if not isinstance(v, dict):
            msg = "extensions must be a mapping of suffix -> language id"
            raise TypeError(msg)

        for suffix, language_id in v.items():
            if not isinstance(suffix, str) or not isinstance(language_id, str):
                msg = "extensions must be a mapping of str -> str"
                raise TypeError(msg)
            if not suffix.startswith(".") or len(suffix) < 2:
                msg = f"Invalid extension '{suffix}': suffixes must start with '.'"
                raise ValueError(msg)
            if not language_id:
                msg = f"Extension '{suffix}' maps to an empty language id"
                raise ValueError(msg)

        return {suffix.lower(): language_id for suffix, language_id in v.items()}

    def extension_map(self) -> dict[str, str]:
        """Default suffix mappings overlaid with the configured ones."""
        return {**DEFAULT_EXTENSIONS, **self.extensions}

    def language_for_path(self, path: str | Path) -> str | None:
        return self.extension_map().get(Path(path).suffix.lower())


class ConfigError(Exception):
    """Raised when symdef.toml is unreadable or fails validation."""


def resolve_output_path(root: Path, output: str) -> Path:
    """Resolve a config-provided output path safely within the root.

    The path must be non-empty, relative, and stay inside the root after
    resolution.
    """
    if not output:
        msg = "output must be a non-empty relative path"
        raise ConfigError(msg)

    if output.startswith("~"):
        msg = "output must be a relative path within the root"
        raise ConfigError(msg)

    output_path = Path(output)
    if output_path.is_absolute():
        msg = "output must be a relative path within the root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output '{output}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output '{output}' escapes the root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> SymdefConfig:
    """Load configuration from symdef.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return SymdefConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SymdefConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e

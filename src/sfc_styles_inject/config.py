"""
Build Configuration Store.

Holds the read-only snapshot of the host build settings the plugin depends on
(project root, output directory, library entry) and the injector tunables.
Both can be populated from the `[tool.sfc_styles_inject]` table of the nearest
`pyproject.toml`, with explicit arguments taking precedence.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

TOOL_SECTION = "sfc_styles_inject"

LibraryEntry = Union[str, List[str], Dict[str, str]]


class LibraryOptions(BaseModel):
  """
  Library-mode build descriptor.
  """

  model_config = ConfigDict(frozen=True)

  entry: Optional[LibraryEntry] = Field(None, description="Library entry point(s).")

  @property
  def single_entry(self) -> Optional[str]:
    """
    Returns the entry path when the library has exactly one string entry.

    Returns:
        Optional[str]: The entry path, or None for multi-entry or missing entries.
    """
    return self.entry if isinstance(self.entry, str) else None


class ResolvedBuildConfig(BaseModel):
  """
  Immutable snapshot of the host build configuration.
  """

  model_config = ConfigDict(frozen=True)

  root: Path = Field(default_factory=Path.cwd, description="Project root directory.")
  out_dir: str = Field("dist", description="Output directory, relative to root.")
  lib: Optional[LibraryOptions] = Field(None, description="Library build descriptor, if any.")

  @field_validator("out_dir", mode="before")
  @classmethod
  def default_out_dir(cls, v: Optional[str]) -> str:
    """Unset or empty output directories fall back to 'dist'."""
    return v or "dist"

  @property
  def library_entry(self) -> Optional[str]:
    """The single string library entry, if this is a library build with one."""
    if self.lib is None:
      return None
    return self.lib.single_entry

  def artifact_path(self, file_name: str) -> Path:
    """
    Resolves a bundle file name to its absolute location on disk.

    Args:
        file_name (str): Path of the artifact relative to the output directory.

    Returns:
        Path: root / out_dir / file_name, resolved.
    """
    return (self.root / self.out_dir / file_name).resolve()

  @classmethod
  def load(
    cls,
    root: Optional[Path] = None,
    out_dir: Optional[str] = None,
    lib_entry: Optional[LibraryEntry] = None,
    search_path: Optional[Path] = None,
  ) -> "ResolvedBuildConfig":
    """
    Loads build settings from pyproject.toml and overrides with arguments.

    Args:
        root (Optional[Path]): Project root. Defaults to the directory holding
            the pyproject.toml, or the search path.
        out_dir (Optional[str]): Override for the output directory.
        lib_entry (Optional[LibraryEntry]): Override for the library entry.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        ResolvedBuildConfig: The resolved configuration.

    Raises:
        ValueError: If the merged values do not validate.
    """
    start_dir = search_path or root or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    final_root = root or toml_dir or start_dir
    final_out_dir = out_dir or toml_config.get("out_dir", "dist")

    final_entry = lib_entry if lib_entry is not None else toml_config.get("lib_entry")
    lib = LibraryOptions(entry=final_entry) if final_entry is not None else None

    try:
      return cls(root=Path(final_root).resolve(), out_dir=final_out_dir, lib=lib)
    except ValidationError as e:
      raise ValueError(f"Build configuration validation failed: {e}")


class InjectorSettings(BaseModel):
  """
  Tunables of the style injector.
  """

  model_config = ConfigDict(frozen=True)

  id_prefix: str = Field("_s-", description="Prefix of the style element id.")
  id_length: int = Field(8, ge=1, description="Number of random characters per placeholder id.")
  max_attempts: int = Field(10, ge=1, description="Collision retries before giving up.")
  component_suffix: str = Field(".vue", description="Suffix identifying single-file components.")
  style_suffix: str = Field(".css", description="Suffix identifying the style half of a component.")

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "InjectorSettings":
    """
    Loads injector settings from pyproject.toml, then applies keyword overrides.

    Args:
        search_path (Optional[Path]): Directory to start searching for TOML config.
        **overrides: Explicit values taking precedence over TOML.

    Returns:
        InjectorSettings: The validated settings.

    Raises:
        ValueError: If the merged values do not validate.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())
    relevant = {k: v for k, v in toml_config.items() if k in cls.model_fields}
    merged = {**relevant, **{k: v for k, v in overrides.items() if v is not None}}
    try:
      return cls.model_validate(merged)
    except ValidationError as e:
      raise ValueError(f"Injector settings validation failed: {e}")


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches parents for 'pyproject.toml' and extracts the tool section.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None
      return data.get("tool", {}).get(TOOL_SECTION, {}), parent

  return {}, None

"""
Host Pipeline Plugin.

Exposes the deferred style injection as a set of build hooks:

1. `config_resolved`: receives the resolved build settings once.
2. `build_start`: opens a fresh `BuildSession`.
3. `transform`: called once per unit; returns a `TransformResult` or None.
4. `write_bundle`: called after all artifacts are on disk; finalizes them.
5. `close_bundle`: drops the session.

The plugin only applies to production builds (`apply = "build"`).
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from sfc_styles_inject.config import InjectorSettings, ResolvedBuildConfig
from sfc_styles_inject.core.finalizer import FinalizeReport
from sfc_styles_inject.core.session import BuildSession


class TransformResult(BaseModel):
  """
  Replacement content for a transformed unit.
  """

  code: str = Field(default="", description="The replacement source code.")


class StyleInjectPlugin:
  """
  Build hooks deferring component style injection to the end of the build.

  Attributes:
      name (str): Plugin name reported to the host.
      apply (str): Host phase the plugin runs in.
      settings (InjectorSettings): Injector tunables.
      config (Optional[ResolvedBuildConfig]): Settings captured by `config_resolved`.
  """

  name = "sfc-styles-inject"
  apply = "build"

  def __init__(self, settings: Optional[InjectorSettings] = None) -> None:
    self.settings = settings or InjectorSettings()
    self.config: Optional[ResolvedBuildConfig] = None
    self._session: Optional[BuildSession] = None

  @property
  def session(self) -> BuildSession:
    """The active build session, opened lazily if the host skipped `build_start`."""
    if self._session is None:
      self.build_start()
    return self._session

  def config_resolved(self, config: ResolvedBuildConfig) -> None:
    """
    Captures the host's resolved build settings.

    Args:
        config: Read-only build configuration snapshot.
    """
    self.config = config

  def build_start(self) -> None:
    """Opens a new build session, discarding any previous one."""
    self._session = BuildSession(config=self.config, settings=self.settings)

  async def transform(self, code: str, unit_id: str) -> Optional[TransformResult]:
    """
    Transforms one unit.

    Args:
        code: Unit source text.
        unit_id: Unit identity.

    Returns:
        Optional[TransformResult]: Replacement code, or None for "no opinion".

    Raises:
        PlaceholderIdExhaustedError: If no placeholder id could be issued.
    """
    result = self.session.transform(code, unit_id)
    if result is None:
      return None
    return TransformResult(code=result)

  async def write_bundle(self, options: Any, bundle: Mapping[str, Any]) -> FinalizeReport:
    """
    Finalizes the artifacts the host has written.

    Args:
        options: Host output options (unused).
        bundle: Mapping of artifact file name to host metadata.

    Returns:
        FinalizeReport: Per-artifact outcome.
    """
    return await self.session.finalize(bundle)

  def close_bundle(self) -> None:
    """Discards the build session."""
    self._session = None

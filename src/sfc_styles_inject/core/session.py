"""
Build Session.

All mutable state of one build (issued placeholder ids and extraction records)
lives on a `BuildSession`. A session is created when a build starts and dropped
when it ends, so repeated or concurrent builds never share records.
"""

import random
from typing import Any, Mapping, Optional

from sfc_styles_inject.config import InjectorSettings, ResolvedBuildConfig
from sfc_styles_inject.core.finalizer import BundleFinalizer, FinalizeReport
from sfc_styles_inject.core.registry import ExtractionRegistry
from sfc_styles_inject.core.tokens import PlaceholderIdGenerator
from sfc_styles_inject.core.transform import UnitTransformer


class BuildSession:
  """
  Owner of the per-build registries.

  Attributes:
      config (ResolvedBuildConfig): Host build settings.
      settings (InjectorSettings): Injector tunables.
      ids (PlaceholderIdGenerator): Placeholder id source.
      registry (ExtractionRegistry): Records of the components seen so far.
  """

  def __init__(
    self,
    config: Optional[ResolvedBuildConfig] = None,
    settings: Optional[InjectorSettings] = None,
    rng: Optional[random.Random] = None,
  ) -> None:
    self.config = config or ResolvedBuildConfig()
    self.settings = settings or InjectorSettings()
    self.ids = PlaceholderIdGenerator(
      length=self.settings.id_length,
      max_attempts=self.settings.max_attempts,
      rng=rng,
    )
    self.registry = ExtractionRegistry(self.new_placeholder_id)
    self._transformer = UnitTransformer(self.registry, self.config, self.settings)

  def new_placeholder_id(self) -> str:
    """Issues a prefixed placeholder id, e.g. `_s-k3j9x0aa`."""
    return self.settings.id_prefix + self.ids.generate()

  def transform(self, code: str, unit_id: str) -> Optional[str]:
    """Per-unit transform phase. See `UnitTransformer.transform`."""
    return self._transformer.transform(code, unit_id)

  async def finalize(self, bundle: Mapping[str, Any]) -> FinalizeReport:
    """Whole-bundle finalization phase. See `BundleFinalizer.finalize`."""
    return await BundleFinalizer(self.config, self.registry).finalize(bundle)

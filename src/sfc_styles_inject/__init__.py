"""
sfc-styles-inject Package.

Defers the injection of single-file component styles until after a bundle has
been written. Component style text is captured during the per-unit transform
phase, the component's export call is tagged with a placeholder marker, and a
final pass over the emitted artifacts replaces each marker with the literal
style text. At runtime the styles are added to the document head the first
time the component renders.

Usage
-----

.. code-block:: python

    import asyncio
    from pathlib import Path
    from sfc_styles_inject import ResolvedBuildConfig, sfc_styles_inject

    plugin = sfc_styles_inject()
    plugin.config_resolved(ResolvedBuildConfig.load(root=Path("my-app")))
    plugin.build_start()

    result = asyncio.run(plugin.transform(code, "/src/Button.vue"))
    ...
    asyncio.run(plugin.write_bundle({}, {"index.js": {}}))
"""

from typing import Optional

from sfc_styles_inject.config import InjectorSettings, LibraryOptions, ResolvedBuildConfig
from sfc_styles_inject.core.finalizer import FinalizeReport
from sfc_styles_inject.core.registry import ExtractionRecord
from sfc_styles_inject.core.scanners import NOT_FOUND, find_call_close
from sfc_styles_inject.core.session import BuildSession
from sfc_styles_inject.core.tokens import PlaceholderIdExhaustedError, PlaceholderIdGenerator
from sfc_styles_inject.plugin import StyleInjectPlugin, TransformResult

__version__ = "0.0.1"


def sfc_styles_inject(settings: Optional[InjectorSettings] = None) -> StyleInjectPlugin:
  """
  Creates the style injection plugin.

  Args:
      settings (InjectorSettings, optional): Injector tunables. If None, they
          are loaded from the nearest pyproject.toml, falling back to defaults.

  Returns:
      StyleInjectPlugin: A plugin instance ready to register with the host.
  """
  return StyleInjectPlugin(settings=settings or InjectorSettings.load())


__all__ = [
  "BuildSession",
  "ExtractionRecord",
  "FinalizeReport",
  "InjectorSettings",
  "LibraryOptions",
  "NOT_FOUND",
  "PlaceholderIdExhaustedError",
  "PlaceholderIdGenerator",
  "ResolvedBuildConfig",
  "StyleInjectPlugin",
  "TransformResult",
  "find_call_close",
  "sfc_styles_inject",
  "__version__",
]

"""
Per-Unit Transform.

Rewrites the units of single-file components as the host pipeline offers them:

- Style halves (`/Foo.vue?...lang.css`) are captured into the registry and
  emitted empty.
- Code halves have their `export default _export_sfc(...)` call rewritten to
  `_export_sfc_with_styles(..., <marker>)`, with a keep-alive scaffold appended
  so the original helper survives tree-shaking.

Transformation:
    export default /*#__PURE__*/_export_sfc(_sfc_main, [["render", _sfc_render]]);
Becomes:
    export default /*#__PURE__*/_export_sfc_with_styles(_sfc_main, [["render", _sfc_render]],console.warn('__###_s-k3j9x0aa###__'));
    ;_export_sfc({}, ['to-remove']);
"""

import re
from typing import Optional

from rich.markup import escape

from sfc_styles_inject.config import InjectorSettings, ResolvedBuildConfig
from sfc_styles_inject.core.registry import ExtractionRecord, ExtractionRegistry
from sfc_styles_inject.core.runtime import (
  EXPORT_HELPER,
  KEEP_ALIVE_SCAFFOLD,
  STYLED_EXPORT_HELPER,
  build_marker,
)
from sfc_styles_inject.core.scanners import NOT_FOUND, find_call_close
from sfc_styles_inject.enums import UnitKind
from sfc_styles_inject.utils.console import log_debug

EXPORT_CALL_PATTERN = re.compile(r"export\s+(?:default\s+)?(?:/\*#__PURE__\*/\s*)?" + re.escape(EXPORT_HELPER) + r"\(")


def unit_name_pattern(component_suffix: str) -> "re.Pattern[str]":
  """
  Compiles the pattern extracting a component base name from a unit identity.

  Args:
      component_suffix: e.g. `.vue`.

  Returns:
      re.Pattern: Matches `/<ASCII word chars><suffix>`, capturing the base name.
  """
  return re.compile(r"/(\w+" + re.escape(component_suffix) + r")", re.ASCII)


def rewrite_export_call(code: str, marker: str) -> Optional[str]:
  """
  Redirects the module's `_export_sfc` export to the style-aware variant.

  Args:
      code: Compiled component module.
      marker: Placeholder marker to pass as the extra trailing argument.

  Returns:
      Optional[str]: The rewritten module, or None if there is no export call
      or its argument list never closes.
  """
  match = EXPORT_CALL_PATTERN.search(code)
  if match is None:
    return None

  start = match.start()
  close = find_call_close(code[start:])
  if close == NOT_FOUND:
    return None
  close += start

  call = code[start:close].replace(EXPORT_HELPER, STYLED_EXPORT_HELPER, 1)

  prev = close - 1
  while prev >= 0 and code[prev].isspace():
    prev -= 1
  needs_comma = prev < 0 or code[prev] not in ",("

  return code[:start] + call + ("," if needs_comma else "") + marker + code[close:] + f"\n;{KEEP_ALIVE_SCAFFOLD}"


class UnitTransformer:
  """
  Applies the transform rules to individual units of one build.

  Attributes:
      registry (ExtractionRegistry): Records shared with the finalizer.
      config (Optional[ResolvedBuildConfig]): Host build settings.
      settings (InjectorSettings): Suffixes used to classify units.
  """

  def __init__(
    self,
    registry: ExtractionRegistry,
    config: Optional[ResolvedBuildConfig] = None,
    settings: Optional[InjectorSettings] = None,
  ) -> None:
    self.registry = registry
    self.config = config
    self.settings = settings or InjectorSettings()
    self._unit_pattern = unit_name_pattern(self.settings.component_suffix)

  def unit_name(self, unit_id: str) -> Optional[str]:
    """Extracts the component base name, or None for non-component units."""
    match = self._unit_pattern.search(unit_id)
    return match.group(1) if match else None

  def classify(self, unit_id: str) -> UnitKind:
    """
    Determines whether a unit is a component style, component code, or neither.

    Args:
        unit_id: Unit identity supplied by the host.

    Returns:
        UnitKind: The classification.
    """
    if self.unit_name(unit_id) is None:
      return UnitKind.OTHER
    if unit_id.endswith(self.settings.style_suffix):
      return UnitKind.STYLE
    return UnitKind.CODE

  def transform(self, code: str, unit_id: str) -> Optional[str]:
    """
    Transforms one unit.

    Args:
        code: Unit text as produced by upstream compilation.
        unit_id: Unit identity (module path, possibly with a query string).

    Returns:
        Optional[str]: Replacement code, or None when this transform has no
        opinion on the unit. Returning the code unchanged is an explicit
        "handled" signal.
    """
    kind = self.classify(unit_id)
    if kind is UnitKind.OTHER:
      return self._passthrough(code, unit_id)

    record = self.registry.get_or_create(self.unit_name(unit_id), unit_id)

    if kind is UnitKind.STYLE:
      record.add_style_block(unit_id, code)
      return ""

    return self._inject_marker(record, code, unit_id)

  def _inject_marker(self, record: ExtractionRecord, code: str, unit_id: str) -> str:
    marker = record.placeholder_marker or build_marker(record.placeholder_id)
    rewritten = rewrite_export_call(code, marker)
    if rewritten is None:
      log_debug(f"No rewritable {EXPORT_HELPER} export in '{escape(unit_id)}', leaving it unchanged.")
      return code

    record.placeholder_marker = marker
    return rewritten

  def _passthrough(self, code: str, unit_id: str) -> Optional[str]:
    entry = self.config.library_entry if self.config else None
    if entry and entry in unit_id:
      return code
    return None

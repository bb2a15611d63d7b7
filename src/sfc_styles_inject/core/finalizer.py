"""
Bundle Finalization.

Runs after the host has written every bundle artifact. Each artifact is read
back, its placeholder markers are replaced with literal `[id, css]` pairs,
the keep-alive scaffolding is stripped, the runtime helpers are prepended, and
the result is written over the original file.

Artifacts are processed one at a time. A failure to read or write one artifact
is logged and skipped; the others are still finalized. A skipped artifact keeps
its unresolved markers.

Every artifact named in the bundle is rewritten, whatever its type: the
runtime helpers are JavaScript and are prepended to `.html`, `.css` and `.map`
artifacts too. Component style units are emitted empty, so a component-only
build normally writes JavaScript chunks alone. Builds that also emit other
asset types should finalize only their chunks, by passing a filtered bundle
mapping.
"""

import asyncio
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple

from pydantic import BaseModel, Field
from rich.markup import escape

from sfc_styles_inject.config import ResolvedBuildConfig
from sfc_styles_inject.core.registry import ExtractionRecord
from sfc_styles_inject.core.runtime import (
  KEEP_ALIVE_SCAFFOLD,
  RUNTIME_HELPERS,
  quote_renderings,
  style_literal,
)
from sfc_styles_inject.utils.console import log_error, log_success


class FinalizeReport(BaseModel):
  """
  Outcome of a finalization pass.
  """

  rewritten: List[Path] = Field(default_factory=list, description="Artifacts rewritten in place.")
  failed: List[Tuple[Path, str]] = Field(default_factory=list, description="Artifacts skipped, with the error.")

  @property
  def has_failures(self) -> bool:
    return len(self.failed) > 0


def finalize_text(code: str, records: Iterable[ExtractionRecord]) -> str:
  """
  Resolves markers and scaffolding in one artifact's text.

  Args:
      code: Bundled artifact content.
      records: Extraction records of the build.

  Returns:
      str: The finalized artifact content, runtime helpers first.
  """
  for record in records:
    if not record.placeholder_marker:
      continue
    replacement = style_literal(record.placeholder_id, record.style_text)
    for marker in quote_renderings(record.placeholder_marker):
      code = code.replace(marker, replacement)

  for scaffold in quote_renderings(KEEP_ALIVE_SCAFFOLD):
    code = code.replace(scaffold, "")

  if code.startswith(RUNTIME_HELPERS):
    return code
  return f"{RUNTIME_HELPERS}{code}"


class BundleFinalizer:
  """
  Rewrites the written bundle using the completed extraction records.
  """

  def __init__(self, config: ResolvedBuildConfig, records: Iterable[ExtractionRecord]) -> None:
    """
    Args:
        config: Host build settings used to locate artifacts on disk.
        records: Extraction records collected during the transform phase.
    """
    self.config = config
    self.records = list(records)

  async def finalize(self, bundle: Mapping[str, Any]) -> FinalizeReport:
    """
    Finalizes every artifact of `bundle`, sequentially.

    Args:
        bundle: Mapping of artifact file name (relative to the output
            directory) to host metadata. Only the names are used.

    Returns:
        FinalizeReport: Which artifacts were rewritten and which failed.
    """
    report = FinalizeReport()

    for file_name in bundle:
      path = self.config.artifact_path(file_name)
      try:
        code = await asyncio.to_thread(path.read_text, encoding="utf-8")
        await asyncio.to_thread(path.write_text, finalize_text(code, self.records), encoding="utf-8")
      except (OSError, UnicodeError) as e:
        log_error(f"Failed to finalize '{escape(str(path))}': {escape(str(e))}")
        report.failed.append((path, str(e)))
        continue
      report.rewritten.append(path)

    if report.rewritten:
      log_success(f"Injected deferred styles into {len(report.rewritten)} artifact(s).")
    return report

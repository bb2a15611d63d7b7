"""
Extraction Registry.

Correlates the two halves of a single-file component seen during one build:
the compiled code module (which receives a placeholder marker) and the style
resource (whose text is captured). The halves arrive in any order, so a record
is created by whichever comes first and completed by the other.

Units are keyed by component base name (`Button.vue`). Two components sharing
a base name in different directories therefore share one record; this is kept
as-is and reported through a warning when it happens.
"""

import posixpath
from typing import Callable, Dict, Iterator, Set

from pydantic import BaseModel, Field
from rich.markup import escape

from sfc_styles_inject.utils.console import log_warning


class ExtractionRecord(BaseModel):
  """
  Deferred-style bookkeeping for one component.
  """

  unit_name: str = Field(..., description="Component base file name, e.g. 'Button.vue'.")
  placeholder_id: str = Field(..., description="Id of the injected <style> element.")
  placeholder_marker: str = Field("", description="Marker embedded in the rewritten code module.")
  style_text: str = Field("", description="Captured style payload.")
  sources: Set[str] = Field(default_factory=set, description="Unit identities that touched this record.")
  style_blocks: Dict[str, str] = Field(default_factory=dict, description="Style text per style unit identity.")

  @property
  def is_complete(self) -> bool:
    """True once both the code half and the style half have been seen."""
    return bool(self.placeholder_marker) and bool(self.style_text)

  def add_style_block(self, unit_id: str, text: str) -> None:
    """
    Captures one style block of the component.

    A component with several `<style>` blocks arrives as several style units
    (`index=0`, `index=1`, ...). Blocks are joined in arrival order; seeing the
    same unit again replaces its block.

    Args:
        unit_id: Identity of the style unit.
        text: Its style text.
    """
    self.style_blocks[unit_id] = text
    self.style_text = "\n".join(self.style_blocks.values())


def _source_dir(unit_id: str) -> str:
  return posixpath.dirname(unit_id.split("?", 1)[0])


class ExtractionRegistry:
  """
  Mapping of unit name to `ExtractionRecord`, owned by one build session.
  """

  def __init__(self, id_factory: Callable[[], str]) -> None:
    """
    Args:
        id_factory: Issues a fresh placeholder id for each new record.
    """
    self._id_factory = id_factory
    self._records: Dict[str, ExtractionRecord] = {}

  def get_or_create(self, unit_name: str, unit_id: str) -> ExtractionRecord:
    """
    Returns the record for `unit_name`, creating it on first sight.

    Args:
        unit_name: Component base name.
        unit_id: Full identity of the unit being transformed.

    Returns:
        ExtractionRecord: The (possibly new) record.
    """
    record = self._records.get(unit_name)
    if record is None:
      record = ExtractionRecord(unit_name=unit_name, placeholder_id=self._id_factory())
      self._records[unit_name] = record
    else:
      self._check_collision(record, unit_id)

    record.sources.add(unit_id)
    return record

  def _check_collision(self, record: ExtractionRecord, unit_id: str) -> None:
    new_dir = _source_dir(unit_id)
    known_dirs = {_source_dir(known): known for known in sorted(record.sources)}
    if new_dir in known_dirs:
      return
    # Once per directory: the caller adds unit_id to sources.
    known = next(iter(known_dirs.values()))
    log_warning(
      f"Components '{escape(known)}' and '{escape(unit_id)}' share the name "
      f"'{escape(record.unit_name)}' and will share one style record."
    )

  def get(self, unit_name: str) -> ExtractionRecord:
    """
    Returns an existing record.

    Raises:
        KeyError: If no unit by that name has been seen.
    """
    return self._records[unit_name]

  def __contains__(self, unit_name: object) -> bool:
    return unit_name in self._records

  def __iter__(self) -> Iterator[ExtractionRecord]:
    return iter(list(self._records.values()))

  def __len__(self) -> int:
    return len(self._records)

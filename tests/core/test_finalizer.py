"""
Tests for Bundle Finalization.
"""

import asyncio
import logging

from sfc_styles_inject.core.finalizer import BundleFinalizer, finalize_text
from sfc_styles_inject.core.registry import ExtractionRecord
from sfc_styles_inject.core.runtime import (
  KEEP_ALIVE_SCAFFOLD,
  RUNTIME_HELPERS,
  build_marker,
  escape_template_literal,
  style_literal,
)


def _record(name="Button.vue", pid="_s-abcdefgh", css=".a{color:red}", with_marker=True):
  return ExtractionRecord(
    unit_name=name,
    placeholder_id=pid,
    placeholder_marker=build_marker(pid) if with_marker else "",
    style_text=css,
  )


def test_single_quoted_marker_replaced():
  record = _record()
  code = f"x(a,{record.placeholder_marker});"

  out = finalize_text(code, [record])

  assert record.placeholder_marker not in out
  assert "x(a,['_s-abcdefgh', `.a{color:red}`]);" in out


def test_double_quoted_marker_replaced():
  record = _record()
  code = 'x(a,console.warn("__###_s-abcdefgh###__"));'

  out = finalize_text(code, [record])

  assert "__###" not in out
  assert "['_s-abcdefgh', `.a{color:red}`]" in out


def test_every_occurrence_is_replaced():
  record = _record()
  code = f"{record.placeholder_marker};{record.placeholder_marker}"
  out = finalize_text(code, [record])
  assert out.count("['_s-abcdefgh', `.a{color:red}`]") == 2


def test_scaffold_stripped_in_both_quote_styles():
  code = f"a();{KEEP_ALIVE_SCAFFOLD}b();" + '_export_sfc({}, ["to-remove"]);'
  out = finalize_text(code, [])
  assert "to-remove" not in out
  assert out.endswith("a();b();")


def test_helpers_prepended_once():
  out = finalize_text("a();", [])
  assert out.startswith(RUNTIME_HELPERS)
  assert out.count("function injectStyles(") == 1

  again = finalize_text(out, [])
  assert again == out


def test_record_without_marker_is_ignored():
  record = _record(with_marker=False)
  out = finalize_text("a();", [record])
  assert out == RUNTIME_HELPERS + "a();"


def test_record_without_style_yields_empty_literal():
  record = _record(css="")
  out = finalize_text(record.placeholder_marker, [record])
  assert out.endswith("['_s-abcdefgh', ``]")


def test_style_text_is_escaped_into_one_literal():
  css = '.a::after{content:"`${x}`\\\\"}'
  assert escape_template_literal(css) == '.a::after{content:"\\`\\${x}\\`\\\\\\\\"}'
  assert style_literal("_s-1", "`") == "['_s-1', `\\``]"


def test_finalizer_rewrites_artifacts(build_config):
  record = _record()
  artifact = build_config.root / "dist" / "index.js"
  artifact.write_text(f"export{{x}};x(a,{record.placeholder_marker});", encoding="utf-8")

  report = asyncio.run(BundleFinalizer(build_config, [record]).finalize({"index.js": {"type": "chunk"}}))

  text = artifact.read_text(encoding="utf-8")
  assert text.startswith(RUNTIME_HELPERS)
  assert "['_s-abcdefgh', `.a{color:red}`]" in text
  assert report.rewritten == [artifact.resolve()]
  assert not report.has_failures


def test_failed_artifact_does_not_block_others(build_config, caplog):
  record = _record()
  nested = build_config.root / "dist" / "assets"
  nested.mkdir()
  good = nested / "good.js"
  good.write_text(record.placeholder_marker, encoding="utf-8")

  bundle = {"missing.js": {}, "assets/good.js": {}}
  with caplog.at_level(logging.ERROR):
    report = asyncio.run(BundleFinalizer(build_config, [record]).finalize(bundle))

  assert good.read_text(encoding="utf-8") == RUNTIME_HELPERS + "['_s-abcdefgh', `.a{color:red}`]"
  assert [p.name for p, _ in report.failed] == ["missing.js"]
  assert report.rewritten == [good.resolve()]
  assert "Failed to finalize" in caplog.text


def test_every_written_artifact_is_finalized(build_config):
  """Artifacts are rewritten regardless of their type; hosts filter the bundle mapping themselves."""
  page = build_config.root / "dist" / "index.html"
  page.write_text("<html></html>", encoding="utf-8")
  chunk = build_config.root / "dist" / "index.js"
  chunk.write_text("a();", encoding="utf-8")

  bundle = {"index.html": {"type": "asset"}, "index.js": {"type": "chunk"}}
  report = asyncio.run(BundleFinalizer(build_config, []).finalize(bundle))

  assert page.read_text(encoding="utf-8") == RUNTIME_HELPERS + "<html></html>"
  assert len(report.rewritten) == 2

  chunks_only = {name: meta for name, meta in bundle.items() if meta["type"] == "chunk"}
  page.write_text("<html></html>", encoding="utf-8")
  asyncio.run(BundleFinalizer(build_config, []).finalize(chunks_only))
  assert page.read_text(encoding="utf-8") == "<html></html>"

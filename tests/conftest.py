"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Build configuration and session fixtures rooted in a temporary project.
- Sample compiled component sources.
"""

import random
import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'sfc_styles_inject' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from sfc_styles_inject.config import LibraryOptions, ResolvedBuildConfig  # noqa: E402
from sfc_styles_inject.core.session import BuildSession  # noqa: E402

COMPONENT_CODE = """import { openBlock as _openBlock, createElementBlock as _createElementBlock } from "vue"
const _sfc_main = { name: "Button" }
function _sfc_render(_ctx, _cache) {
  return (_openBlock(), _createElementBlock("button", { class: "a" }, "Click (me)"))
}
import _export_sfc from "plugin-vue:export-helper"
export default /*#__PURE__*/_export_sfc(_sfc_main, [["render", _sfc_render]])"""


@pytest.fixture
def component_code() -> str:
  """Compiled code half of a single-file component."""
  return COMPONENT_CODE


@pytest.fixture
def build_config(tmp_path: Path) -> ResolvedBuildConfig:
  """Build settings rooted in a temporary project with a 'dist' output directory."""
  (tmp_path / "dist").mkdir()
  return ResolvedBuildConfig(root=tmp_path, out_dir="dist")


@pytest.fixture
def lib_config(tmp_path: Path) -> ResolvedBuildConfig:
  """Library-mode build settings with a single string entry."""
  (tmp_path / "dist").mkdir(exist_ok=True)
  return ResolvedBuildConfig(root=tmp_path, out_dir="dist", lib=LibraryOptions(entry="src/main.ts"))


@pytest.fixture
def session(build_config: ResolvedBuildConfig) -> BuildSession:
  """A build session with a seeded random source."""
  return BuildSession(config=build_config, rng=random.Random(1234))

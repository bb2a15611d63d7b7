"""
Enumerations for sfc-styles-inject.

This module defines the states of the delimiter-aware scanner and the kinds of
units the transform stage distinguishes.
"""

from enum import Enum


class ScanState(str, Enum):
  """
  Lexical context of the call scanner.

  Parentheses only count towards nesting in `CODE`. The three literal states
  make every character inert except their own closing delimiter and the
  backslash escape.
  """

  CODE = "code"
  IN_SINGLE = "in_single"  # '...'
  IN_DOUBLE = "in_double"  # "..."
  IN_TEMPLATE = "in_template"  # `...`


class UnitKind(str, Enum):
  """
  Classification of a unit offered by the host pipeline.
  """

  STYLE = "style"  # The style half of a component (Foo.vue?...lang.css)
  CODE = "code"  # The compiled script/template half of a component
  OTHER = "other"  # Not part of a single-file component

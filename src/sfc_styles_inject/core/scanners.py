"""
Delimiter-Aware Call Scanner.

Finds where a call's argument list ends in JavaScript source text without
building a syntax tree. The scanner is a small finite-state machine over
`ScanState`: parentheses only count while in `CODE`, and the three literal
states (single-quoted, double-quoted, template) make everything inert until
their unescaped closing delimiter.

Limitations:
    Regular-expression literals, comments and `${...}` interpolation inside
    template literals are not understood. A parenthesis or quote inside any of
    those can desynchronise the scan.
"""

from typing import Dict

from sfc_styles_inject.enums import ScanState

NOT_FOUND = -1

_OPENERS: Dict[str, ScanState] = {
  "'": ScanState.IN_SINGLE,
  '"': ScanState.IN_DOUBLE,
  "`": ScanState.IN_TEMPLATE,
}

_CLOSERS: Dict[ScanState, str] = {state: delim for delim, state in _OPENERS.items()}


def find_call_close(code: str) -> int:
  """
  Returns the index of the parenthesis closing the first call in `code`.

  The first `(` seen outside a literal opens the call; the index returned is
  that of the `)` bringing the nesting depth back to zero.

  Args:
    code: Source text starting at (or before) the call site.

  Returns:
    int: Index of the closing parenthesis relative to the start of `code`,
    or `NOT_FOUND` if the text ends first.

  Example:
    >>> find_call_close("f(a, ')')")
    8
  """
  state = ScanState.CODE
  escaped = False
  depth = 0

  for idx, char in enumerate(code):
    if state is ScanState.CODE:
      if char == ")":
        depth -= 1
        if depth == 0:
          return idx
      elif char == "(":
        depth += 1
      elif char in _OPENERS:
        state = _OPENERS[char]
      continue

    # Inside a literal
    if escaped:
      escaped = False
    elif char == "\\":
      escaped = True
    elif char == _CLOSERS[state]:
      state = ScanState.CODE

  return NOT_FOUND

"""
Tests for the Delimiter-Aware Call Scanner.
"""

from hypothesis import given, settings, strategies as st

from sfc_styles_inject.core.scanners import NOT_FOUND, find_call_close


def test_simple_call():
  assert find_call_close("f(a, b)") == 6


def test_parentheses_inside_all_literal_kinds():
  code = "f(a, \"x(y)\", 'z)', `t)`)"
  assert find_call_close(code) == len(code) - 1


def test_nested_calls():
  code = "f(g(h(1)), (2 + 3))"
  assert find_call_close(code) == len(code) - 1


def test_stops_at_first_call_close():
  code = "f(a) + g(b)"
  assert find_call_close(code) == 3


def test_leading_text_before_call():
  code = "export default /*#__PURE__*/_export_sfc(m, [[\"render\", r]]);"
  assert code[find_call_close(code)] == ")"
  assert find_call_close(code) == len(code) - 2


def test_escaped_delimiter_does_not_close_literal():
  code = r"f('it\'s )', 1)"
  assert find_call_close(code) == len(code) - 1


def test_escaped_backslash_then_delimiter_closes_literal():
  code = r"f('a\\', b)"
  assert find_call_close(code) == len(code) - 1


def test_other_quotes_are_inert_inside_literal():
  code = "f(\"it's (\", `say \"hi\" )`)"
  assert find_call_close(code) == len(code) - 1


def test_unbalanced_returns_not_found():
  assert find_call_close("f(a, (b)") == NOT_FOUND


def test_unterminated_literal_returns_not_found():
  assert find_call_close("f('abc)") == NOT_FOUND


def test_empty_text():
  assert find_call_close("") == NOT_FOUND


_SAFE = st.text(alphabet="abc ,+123", max_size=8)


@st.composite
def _calls(draw):
  """Builds `f(...)` calls whose literal arguments are stuffed with parentheses."""
  parts = []
  for _ in range(draw(st.integers(min_value=0, max_value=5))):
    kind = draw(st.sampled_from(["plain", "'", '"', "`", "nested"]))
    body = draw(st.text(alphabet="ab()[] ", max_size=6))
    if kind == "plain":
      parts.append(draw(_SAFE))
    elif kind == "nested":
      parts.append(f"g({draw(_SAFE)})")
    else:
      parts.append(f"{kind}{body}{kind}")
  return "f(" + ", ".join(parts) + ")"


@given(call=_calls(), tail=st.text(alphabet="()'\"` x", max_size=6))
@settings(max_examples=200)
def test_close_index_is_the_final_real_parenthesis(call, tail):
  assert find_call_close(call + tail) == len(call) - 1


@given(body=st.text(alphabet="ab, '\"", max_size=10))
@settings(max_examples=100)
def test_no_closer_is_not_found(body):
  assert find_call_close("f(" + body) == NOT_FOUND

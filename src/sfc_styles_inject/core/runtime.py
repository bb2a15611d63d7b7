"""
Runtime Source Fragments.

JavaScript text emitted into rewritten modules and bundles:

- `RUNTIME_HELPERS`: prepended once to every finalized artifact. Provides
  `injectStyles` (adds a `<style>` element to the document head, once per id)
  and `_export_sfc_with_styles`, which wraps a component's render function so
  its styles are injected on first render before delegating to `_export_sfc`.
- Placeholder markers: `console.warn('__###<id>###__')`. A side-effecting call
  on a plain string literal, so minifiers keep it byte-for-byte apart from
  possibly swapping the quote style.
- `KEEP_ALIVE_SCAFFOLD`: a throwaway `_export_sfc` call appended to rewritten
  modules. Once every `_export_sfc(` call site is renamed, Rollup's
  tree-shaking would drop the helper that `_export_sfc_with_styles` delegates
  to. The scaffold keeps it referenced and is stripped at finalization. Pairing
  this package with a bundler that does not tree-shake `_export_sfc` makes the
  scaffold unnecessary but harmless.
"""

from typing import Tuple

EXPORT_HELPER = "_export_sfc"
STYLED_EXPORT_HELPER = "_export_sfc_with_styles"

KEEP_ALIVE_SCAFFOLD = f"{EXPORT_HELPER}({{}}, ['to-remove']);"

RUNTIME_HELPERS = """function injectStyles(id, css) {
    if (!css || typeof(document) === 'undefined' || document.getElementById(id)) {
        return;
    }
    var head = document.head || document.getElementsByTagName('head')[0];
    var style = document.createElement('style');
    style.id = id;
    style.type = 'text/css';
    style.appendChild(document.createTextNode(css));
    head.appendChild(style);
}

const _export_sfc_with_styles = (sfc, props, styles) => {
    for (const prop of props) {
        if (prop[0] === 'render') {
            let injected = !styles;
            const render = prop[1];
            prop[1] = function () {
                if (!injected) {
                    injectStyles(styles[0], styles[1]);
                    injected = true;
                }
                return render.apply(this, arguments);
            };
            break;
        }
    }
    return _export_sfc(sfc, props);
};
"""


def build_marker(placeholder_id: str) -> str:
  """
  Builds the placeholder marker embedded in a rewritten module.

  Args:
      placeholder_id: The record's placeholder id (e.g. `_s-k3j9x0aa`).

  Returns:
      str: `console.warn('__###<placeholder_id>###__')`.
  """
  return f"console.warn('__###{placeholder_id}###__')"


def quote_renderings(fragment: str) -> Tuple[str, ...]:
  """
  Returns `fragment` as written and with single quotes swapped for double.

  Minifiers may normalise string quoting, so finalization has to look for both.
  """
  swapped = fragment.replace("'", '"')
  if swapped == fragment:
    return (fragment,)
  return (fragment, swapped)


def escape_template_literal(text: str) -> str:
  """
  Escapes text for embedding in a JavaScript template literal.

  Backslashes, backticks and `${` are escaped so the literal evaluates to
  exactly `text`.

  Args:
      text: Raw style text.

  Returns:
      str: The escaped body (without surrounding backticks).
  """
  return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def style_literal(placeholder_id: str, style_text: str) -> str:
  """
  Renders the `[id, css]` pair that replaces a placeholder marker.

  Args:
      placeholder_id: Style element id.
      style_text: Raw captured style text.

  Returns:
      str: e.g. ``['_s-k3j9x0aa', `.a{color:red}`]``.
  """
  return f"['{placeholder_id}', `{escape_template_literal(style_text)}`]"

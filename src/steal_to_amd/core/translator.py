"""
Dependency Name Translator.

Converts a StealJS dependency id into its RequireJS/AMD equivalent. Rules are
tried in order and the first match wins:

1. Exact entry in ``convert_map``                 ``can/util`` -> ``can/util/jquery``
2. Suffix listed in ``extension_plugins``         ``views/page.mustache!`` -> ``mustache!views/page.mustache``
3. ``.js`` suffix                                 ``can/util/fixture.js`` -> ``can/util/fixture``
4. Relative path without a plugin bang            ``./local/helper`` unchanged
5. Anything else is a package main module         ``can/view`` -> ``can/view/view``
"""

from steal_to_amd.config import NameMapping

JS_EXTENSION = ".js"
RELATIVE_PREFIX = "./"
PLUGIN_BANG = "!"


def translate_name(name: str, mapping: NameMapping) -> str:
  """
  Translates a single dependency id.

  Args:
      name: The StealJS dependency id.
      mapping: Exact-name and extension-to-plugin tables.

  Returns:
      str: The AMD dependency id.
  """
  if name in mapping.convert_map:
    return mapping.convert_map[name]

  for extension, plugin in mapping.extension_plugins.items():
    if name.endswith(extension):
      return plugin + name.replace(PLUGIN_BANG, "", 1)

  if name.endswith(JS_EXTENSION):
    return name[: -len(JS_EXTENSION)]

  if name.startswith(RELATIVE_PREFIX) and not name.endswith(PLUGIN_BANG):
    return name

  # StealJS resolves "pkg" to "pkg/pkg"; AMD needs the explicit path.
  parts = name.split("/")
  parts.append(parts[-1])
  return "/".join(parts)


class NameTranslator:
  """
  Callable binding of `translate_name` to one mapping.
  """

  def __init__(self, mapping: NameMapping):
    self.mapping = mapping

  def __call__(self, name: str) -> str:
    return translate_name(name, self.mapping)

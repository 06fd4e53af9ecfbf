"""
steal-to-amd Package.

Rewrites StealJS module headers into AMD (RequireJS) module headers while
leaving the rest of each file exactly as written.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import steal_to_amd
    code = "steal('can/control', function(Control) {});"
    print(steal_to_amd.convert(code))
    # define(['can/control'], function(Control) {});

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from steal_to_amd import ConversionEngine, RuntimeConfig

    config = RuntimeConfig.load(convert_map={"lodash": "vendor/lodash"})
    res = ConversionEngine(config).run(code)

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Dict, Optional

from steal_to_amd.config import NameMapping, RuntimeConfig
from steal_to_amd.core.conversion_result import ConversionResult
from steal_to_amd.core.engine import ConversionEngine
from steal_to_amd.core.translator import translate_name

__version__ = "0.1.0"


def convert(
  code: str,
  convert_map: Optional[Dict[str, str]] = None,
  extension_plugins: Optional[Dict[str, str]] = None,
) -> str:
  """
  Converts a StealJS module source string into an AMD module.

  Sources without a top-level ``steal()`` call are returned unchanged.

  Args:
      code (str): The source code to convert.
      convert_map (dict, optional): Exact-name entries layered over the defaults.
      extension_plugins (dict, optional): Plugin entries layered over the defaults.

  Returns:
      str: The converted source code.

  Raises:
      ValueError: If the source cannot be parsed or the header cannot be rewritten.
  """
  mapping = NameMapping.default().merged(convert_map, extension_plugins)
  engine = ConversionEngine(RuntimeConfig(mapping=mapping))

  result = engine.run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Conversion failed:\n{error_msg}")

  return result.code


__all__ = [
  "ConversionEngine",
  "ConversionResult",
  "NameMapping",
  "RuntimeConfig",
  "convert",
  "translate_name",
  "__version__",
]

"""
CLI Subpackage.

Modules:
    - ``__main__``: The argparse definition and dispatcher.
    - ``handlers/*``: One module per command (convert, translate, audit).
"""

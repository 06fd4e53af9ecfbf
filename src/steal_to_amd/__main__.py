"""
Entry point for module execution (``python -m steal_to_amd``).
"""

import sys
from steal_to_amd.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())

"""
Allow running nodepulsectl as a module: python -m nodepulse.cli
"""

import sys
from .nodepulsectl import main

if __name__ == "__main__":
    sys.exit(main())

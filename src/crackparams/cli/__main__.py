"""
Entry point for ``python -m crackparams.cli``
"""

from .main import main

if __name__ == '__main__':
    import sys
    sys.exit(main())

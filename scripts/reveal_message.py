#!/usr/bin/env python
"""Print the message hidden in a stored image."""
import sys

from stegvault.cli import main

if __name__ == "__main__":
    sys.exit(main())

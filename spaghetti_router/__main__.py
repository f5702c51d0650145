"""
Entry point for spaghetti_router CLI
"""
import sys

from route import main

if __name__ == '__main__':
    sys.exit(main())

#!/usr/bin/env python3
"""
RouteMap CLI - Command Line Interface

Entry point for the routemap command-line tool.
"""

import logging
import sys

from routemap.scanner import main as scanner_main


def main():
    """Main CLI entry point."""
    try:
        code = scanner_main()
    except KeyboardInterrupt:
        print("\n❌ Scan interrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        logging.getLogger(__name__).debug("Unhandled error", exc_info=True)
        sys.exit(1)
    sys.exit(code or 0)


if __name__ == "__main__":
    main()

"""Main entry point when executing layercache as a package.

This allows running the package using python -m layercache.
"""

from layercache.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()

"""Main entry point when executing pawscheck as a package.

This allows running the package using python -m pawscheck.
"""

from pawscheck.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()

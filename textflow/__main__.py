"""Package entry point for ``python -m textflow``.

WHY: Users run the wrapper as ``python -m textflow input.txt --width 40``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() function.
"""

from textflow.cli import main

if __name__ == "__main__":
    main()

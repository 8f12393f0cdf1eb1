"""Allow ``python -m memorybridge``."""

from memorybridge.cli.commands import main

if __name__ == "__main__":
    main()

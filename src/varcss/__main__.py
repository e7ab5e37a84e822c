"""Allow ``python -m varcss``."""

from varcss.cli import main

if __name__ == "__main__":
    main()

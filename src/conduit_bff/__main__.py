"""Allow ``python -m conduit_bff``."""

from conduit_bff.cli import main

if __name__ == "__main__":
    main()

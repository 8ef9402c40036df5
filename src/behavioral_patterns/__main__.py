"""Allow ``python -m behavioral_patterns``."""
import sys

from behavioral_patterns.cli.main import main

if __name__ == "__main__":
    sys.exit(main())

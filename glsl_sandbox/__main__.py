"""Allow ``python -m glsl_sandbox``."""

import sys

from glsl_sandbox.cli import main

if __name__ == "__main__":
    sys.exit(main())

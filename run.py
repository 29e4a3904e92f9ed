#!/usr/bin/env python3
"""Resume Screener launcher"""

import sys
from pathlib import Path

# make the package importable when run from a checkout
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

if __name__ == "__main__":
    from resume_screener.main import main
    sys.exit(main())

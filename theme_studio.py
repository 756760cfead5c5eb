#!/usr/bin/env python3
"""
Theme Studio - MotiveWave color editor
Entry point script
"""

import sys
from themestudio.__main__ import main
if __name__ == "__main__":
    sys.exit(main())

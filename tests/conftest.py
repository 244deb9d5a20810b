"""
Pytest configuration.
Puts the project root on sys.path so app, services, domain etc. import
without installing the package, and pins the settings to the testing profile.
"""

import os
import sys
from pathlib import Path

os.environ.setdefault("ENVIRONMENT", "testing")

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

"""Global test fixtures."""

import os

# Tests must not pick up a developer's local config file
# This must happen at module load time, not in a fixture
os.environ.pop("BACKOFFICE_CONFIG_FILE", None)

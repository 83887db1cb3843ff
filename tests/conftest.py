"""Global test fixtures."""

import os
import tempfile

# Keep the developer's real ~/.prodrec and config file out of test runs.
# This must happen at module load time, before any test module builds a Config.
os.environ.pop("PRODREC_CONFIG_FILE", None)
os.environ["PRODREC_DATA_DIR"] = tempfile.mkdtemp(prefix="prodrec-test-")

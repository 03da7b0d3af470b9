import os
import tempfile

# bannergen.main configures file logging on import; keep test runs out of ./logs.
os.environ.setdefault("APP_LOG_DIR", tempfile.mkdtemp(prefix="bannergen-logs-"))

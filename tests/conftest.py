import os
import tempfile

# Point the app at a throwaway SQLite file before config.py is imported
_tmp_dir = tempfile.mkdtemp(prefix="fittracker-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_tmp_dir, "test.db")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"

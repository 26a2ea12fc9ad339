"""
Point the application at a throwaway SQLite database before it is imported.
"""
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="autoflow-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_db_dir, "autoflow.db")

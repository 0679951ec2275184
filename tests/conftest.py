import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'flagfit'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_flagfit_caches


@pytest.fixture(autouse=True)
def _reset_global_caches() -> None:
    """Ensure all global caches are fresh for each test."""
    reset_flagfit_caches()
    yield
    reset_flagfit_caches()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated project environment for tests.

    Points FLAGFIT_PROJECT_ROOT at tmp_path and drops any FLAGFIT_* overrides
    from the developer shell so config loading is deterministic.
    """
    for key in list(os.environ):
        if key.startswith("FLAGFIT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("FLAGFIT_PROJECT_ROOT", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".flagfit").mkdir(exist_ok=True)
    return tmp_path

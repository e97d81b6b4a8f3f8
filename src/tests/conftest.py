from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def clear_azure_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove AZURE_* and SWA_* vars to prevent cross-test leakage.

    Yields:
        Iterator[None]: Context manager semantics for pytest.
    """
    to_clear = [k for k in os.environ if k.upper().startswith(("AZURE_", "SWA_"))]
    for k in to_clear:
        monkeypatch.delenv(k, raising=False)
    yield


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test in an empty directory so no stray .env file is read."""
    monkeypatch.chdir(tmp_path)

"""Pytest fixtures shared across the test suite."""

import io
import os
import tempfile
import uuid

# Isolated upload dir and database; must be set before `config` is imported
_TMP_DIR = tempfile.mkdtemp(prefix="dashboard-tests-")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'sessions.db')}"

import pandas as pd
import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def sample_rows():
    """Three rows where one B value is not a number."""

    return [
        {"A": "x", "B": "1"},
        {"A": "y", "B": "2"},
        {"A": "z", "B": "n/a"},
    ]


@pytest.fixture
def session_id():
    return uuid.uuid4().hex


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def workbook_bytes():
    """Build an .xlsx file in memory from {sheet_name: DataFrame}."""

    def _build(sheets):
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            for name, df in sheets.items():
                df.to_excel(writer, sheet_name=name, index=False)
        return buffer.getvalue()

    return _build

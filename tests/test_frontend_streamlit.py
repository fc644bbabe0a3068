"""Tests for the Streamlit dashboard, run against the real API through TestClient."""

import uuid
from pathlib import Path

import pandas as pd
import pytest
import requests
import streamlit as st
from streamlit.testing.v1 import AppTest

from config import BACKEND_URL

APP_PATH = Path(__file__).resolve().parent.parent / "frontend_streamlit.py"


class FakeUpload:
    """Stand-in for Streamlit's UploadedFile."""

    def __init__(self, name, data):
        self.name = name
        self.file_id = uuid.uuid4().hex
        self._data = data

    def getvalue(self):
        return self._data


@pytest.fixture
def backend(client, monkeypatch):
    """Route the dashboard's `requests` calls to the app and record uploads."""

    uploads = []

    def _path(url):
        return url[len(BACKEND_URL):]

    def _post(url, **kwargs):
        if _path(url) == "/upload/excel":
            uploads.append(kwargs["files"]["file"][0])
        return client.post(_path(url), **kwargs)

    monkeypatch.setattr(requests, "get", lambda url, **kw: client.get(_path(url), **kw))
    monkeypatch.setattr(requests, "post", _post)
    monkeypatch.setattr(requests, "patch", lambda url, **kw: client.patch(_path(url), **kw))
    monkeypatch.setattr(requests, "delete", lambda url, **kw: client.delete(_path(url), **kw))
    return uploads


@pytest.fixture
def uploader(monkeypatch):
    """Control what `st.file_uploader` returns on the next script run."""

    current = {"file": None}
    monkeypatch.setattr(st, "file_uploader", lambda *args, **kwargs: current["file"])
    return current


def _sales_workbook(workbook_bytes, regions):
    df = pd.DataFrame({"Region": regions, "Sales": list(range(1, len(regions) + 1))})
    return workbook_bytes({"Sheet1": df})


def _app():
    return AppTest.from_file(str(APP_PATH), default_timeout=60)


def test_removing_a_chart_keeps_the_next_chart_settings(client, backend, uploader, workbook_bytes) -> None:
    uploader["file"] = FakeUpload("sales.xlsx", _sales_workbook(workbook_bytes, ["North", "South"]))
    at = _app()
    at.run()
    assert not at.exception

    sid = at.session_state["session_id"]
    client.post(f"/charts/{sid}")
    client.patch(f"/charts/{sid}/1", json={"chart_type": "pie"})
    at.run()
    assert at.selectbox(key="type_1").value == "pie"

    at.button(key="remove_0").click().run()

    assert not at.exception
    assert client.get(f"/charts/{sid}").json() == [
        {"x_axis": "Region", "y_axis": "Sales", "chart_type": "pie"}
    ]
    assert at.selectbox(key="type_0").value == "pie"


def test_same_file_name_with_new_content_replaces_the_table(client, backend, uploader, workbook_bytes) -> None:
    uploader["file"] = FakeUpload("report.xlsx", _sales_workbook(workbook_bytes, ["North", "South"]))
    at = _app()
    at.run()
    first_sid = at.session_state["session_id"]
    assert at.session_state["analysis"]["total_rows"] == 2

    uploader["file"] = FakeUpload("report.xlsx", _sales_workbook(workbook_bytes, ["A", "B", "C"]))
    at.run()

    assert backend == ["report.xlsx", "report.xlsx"]
    assert at.session_state["analysis"]["total_rows"] == 3
    assert at.session_state["session_id"] != first_sid
    # the replaced session is released on the backend
    assert client.get(f"/charts/{first_sid}").status_code == 404


def test_failed_upload_is_not_resent_on_rerun(backend, uploader) -> None:
    uploader["file"] = FakeUpload("broken.xlsx", b"not a workbook")
    at = _app()
    at.run()
    at.run()

    assert backend == ["broken.xlsx"]
    assert at.session_state["session_id"] is None

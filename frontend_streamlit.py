import streamlit as st
import pandas as pd
import requests
import base64

from config import BACKEND_URL

# ========================
# CONFIG
# ========================
BASE_URL = BACKEND_URL

st.set_page_config(
    page_title="Spreadsheet Dashboard",
    layout="wide"
)

# ========================
# STATE VARIABLES
# ========================
if "session_id" not in st.session_state:
    st.session_state.session_id = None

if "analysis" not in st.session_state:
    st.session_state.analysis = None

# file_id of the last upload attempt, successful or not
if "upload_id" not in st.session_state:
    st.session_state.upload_id = None

CHART_WIDGET_PREFIXES = ("x_", "y_", "type_")


def reset_chart_widgets():
    """Drop per-chart widget state; widget keys follow list position."""
    for key in list(st.session_state.keys()):
        if key.startswith(CHART_WIDGET_PREFIXES):
            del st.session_state[key]


def remove_chart(index: int):
    requests.delete(f"{BASE_URL}/charts/{st.session_state.session_id}/{index}")
    # Later charts shift down one position
    reset_chart_widgets()


def release_session(session_id):
    if session_id:
        requests.delete(f"{BASE_URL}/upload/{session_id}")


def fetch_chart_configs():
    resp = requests.get(f"{BASE_URL}/charts/{st.session_state.session_id}")
    if resp.status_code != 200:
        st.error(f"Could not load charts: {resp.text}")
        return []
    return resp.json()


def update_chart(index: int, updates: dict):
    resp = requests.patch(f"{BASE_URL}/charts/{st.session_state.session_id}/{index}", json=updates)
    if resp.status_code != 200:
        st.error(f"Update failed: {resp.json().get('detail', resp.text)}")


# Title
st.title("📊 Excel Data Analysis Dashboard")

# 1. FILE UPLOAD
uploaded_file = st.file_uploader("Upload your Excel file", type=["xlsx", "xls"])

if uploaded_file is not None and uploaded_file.file_id != st.session_state.upload_id:
    st.session_state.upload_id = uploaded_file.file_id
    with st.spinner("Uploading..."):
        files = {"file": (uploaded_file.name, uploaded_file.getvalue())}
        resp = requests.post(f"{BASE_URL}/upload/excel", files=files)

        # The previous table is replaced either way
        release_session(st.session_state.session_id)
        reset_chart_widgets()

        if resp.status_code != 200:
            # Decode failure: no dashboard
            st.session_state.session_id = None
            st.session_state.analysis = None
            st.error(f"Upload failed: {resp.text}")
        else:
            data = resp.json()
            st.session_state.session_id = data["session_id"]
            st.session_state.analysis = data["analysis"]

analysis = st.session_state.analysis

# 2. ANALYSIS RESULTS
if st.session_state.session_id and analysis:
    st.header("Analysis Results")
    st.write(f"Total Rows: {analysis['total_rows']}")
    st.write(f"Columns: {', '.join(analysis['columns'])}")
    st.write(f"Numeric Columns: {', '.join(analysis['numeric_columns'])}")

    if st.button("+ Add Graph"):
        requests.post(f"{BASE_URL}/charts/{st.session_state.session_id}")

    chart_types = requests.get(f"{BASE_URL}/charts/types").json()["chart_types"]

    # 3. CHARTS
    for index, config in enumerate(fetch_chart_configs()):
        st.divider()
        c1, c2, c3, c4 = st.columns([3, 3, 2, 1])

        x_options = [""] + analysis["columns"]
        y_options = [""] + analysis["numeric_columns"]

        with c1:
            x_axis = st.selectbox(
                "X-Axis", x_options,
                index=x_options.index(config["x_axis"]) if config["x_axis"] in x_options else 0,
                key=f"x_{index}",
            )
        with c2:
            y_axis = st.selectbox(
                "Y-Axis", y_options,
                index=y_options.index(config["y_axis"]) if config["y_axis"] in y_options else 0,
                key=f"y_{index}",
            )
        with c3:
            chart_type = st.selectbox(
                "Chart", chart_types,
                index=chart_types.index(config["chart_type"]) if config["chart_type"] in chart_types else 0,
                format_func=str.upper,
                key=f"type_{index}",
            )
        with c4:
            st.button("🗑️", key=f"remove_{index}", on_click=remove_chart, args=(index,))

        updates = {}
        if (x_axis or None) != config["x_axis"]:
            updates["x_axis"] = x_axis or None
        if (y_axis or None) != config["y_axis"]:
            updates["y_axis"] = y_axis or None
        if chart_type != config["chart_type"]:
            updates["chart_type"] = chart_type
        if updates:
            update_chart(index, updates)

        resp = requests.get(f"{BASE_URL}/charts/{st.session_state.session_id}/{index}/image")
        if resp.status_code != 200:
            st.error(f"Error: {resp.text}")
            continue

        chart = resp.json()
        if chart.get("image_base64"):
            st.subheader(chart["title"])
            st.image(base64.b64decode(chart["image_base64"]))
        else:
            st.info(chart.get("message", "No chart"))

    # 4. SUMMARY STATISTICS
    st.header("Summary Statistics")
    stat_rows = []
    for col, details in analysis["summary_stats"].items():
        stat_rows.append({"Column": col, **details})
    st.dataframe(pd.DataFrame(stat_rows), use_container_width=True)

import os
import requests
import streamlit as st
import pandas as pd

BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")

st.set_page_config(page_title="dbcheck — Database Status", layout="wide")
st.title("Database Status")

# =========================
# Sidebar — Run options
# =========================
with st.sidebar:
    st.header("Diagnostic")
    timeout = st.number_input(
        "Deadline (seconds)", min_value=1.0, max_value=300.0, value=30.0, step=1.0,
        help="Tables not probed within this time are reported as cancelled.",
    )
    refresh = st.button("Refresh", use_container_width=True)

def _get(path: str, **params) -> dict:
    try:
        r = requests.get(f"{BACKEND_URL}{path}", params=params or None, timeout=timeout + 10)
    except requests.exceptions.RequestException as e:
        return {"error": f"API connection issue: {e}"}
    if r.status_code != 200:
        return {"error": f"Backend returned {r.status_code}: {r.text}"}
    return r.json() or {}

if refresh or "report" not in st.session_state:
    with st.spinner("Checking database…"):
        st.session_state["quick"] = _get("/diagnostic/quick")
        st.session_state["report"] = _get("/diagnostic", timeout=timeout)

quick = st.session_state.get("quick") or {}
report = st.session_state.get("report") or {}

# =========================
# Quick check
# =========================
if quick.get("error"):
    st.error(quick["error"])
elif quick.get("ready"):
    st.success(quick.get("message", "Database is ready!"))
else:
    st.warning(quick.get("message", "Database is not ready."))

if report.get("error"):
    st.error(f"Failed to run diagnostic: {report['error']}")
    st.caption("Check if the backend API is running and accessible.")
    st.stop()

# =========================
# Summary + tables
# =========================
summary = report.get("summary") or {}
c1, c2, c3 = st.columns(3)
c1.metric("Total Records", int(summary.get("total_rows", 0)))
c2.metric("Active Tables", f"{summary.get('active_tables', 0)}/{summary.get('total_tables', 0)}")
c3.metric("Issues Found", int(summary.get("issue_count", 0)))

tables = report.get("tables") or {}
if tables:
    st.subheader("Table Status")
    df = pd.DataFrame(
        [
            {
                "Table": name,
                "Exists": "✅" if info.get("exists") else "❌",
                "Rows": info.get("row_count", 0),
                "Sample columns": ", ".join(
                    f"{c} ({(info.get('column_kinds') or {}).get(c, '?')})" for c in info.get("columns") or []
                ),
            }
            for name, info in tables.items()
        ]
    )
    st.dataframe(df, use_container_width=True, hide_index=True)

# =========================
# Issues & recommendations
# =========================
issues = report.get("issues") or []
if issues:
    st.subheader("⚠️ Issues Found")
    for issue in issues:
        st.markdown(f"- {issue}")

recommendations = report.get("recommendations") or []
if recommendations:
    st.subheader("💡 Recommendations")
    for rec in recommendations:
        st.info(rec)

with st.expander("Show sample rows"):
    for name, info in tables.items():
        if info.get("sample_row"):
            st.markdown(f"**{name}**")
            st.json(info["sample_row"])

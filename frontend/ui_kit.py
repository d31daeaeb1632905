import pandas as pd
import requests
import streamlit as st


def set_page():
    st.set_page_config(
        page_title="Posyandu: Pemantauan Tumbuh Kembang",
        page_icon="👶",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.markdown(
        """
        <style>
        .main { padding-top: 0.5rem; }
        .block-container { padding-top: 1.0rem; padding-bottom: 2rem; }
        div[data-testid="stMetric"] { background: rgba(255,255,255,0.04); border: 1px solid rgba(255,255,255,0.06); padding: 14px 14px 10px 14px; border-radius: 14px; }
        div[data-testid="stMetricValue"] { font-size: 28px; }
        .card { background: rgba(255,255,255,0.04); border: 1px solid rgba(255,255,255,0.08); border-radius: 16px; padding: 14px; }
        .muted { opacity: 0.75; }
        .small { font-size: 0.92rem; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def status_badge(status: str) -> str:
    status = status or "Normal"
    if status == "Resiko Stunting":
        return "🔴 Resiko Stunting"
    if status == "Normal":
        return "🟢 Normal"
    return f"⚪ {status}"


def sex_label(sex: str) -> str:
    return {"M": "Laki-laki", "F": "Perempuan"}.get(sex, sex or "-")


def card(title: str, body_md: str):
    st.markdown(
        f"<div class='card'><h4 style='margin:0 0 8px 0'>{title}</h4>{body_md}</div>",
        unsafe_allow_html=True,
    )


def to_df_growth(points):
    """Growth trend points -> DataFrame indexed by measurement date."""
    if not isinstance(points, list) or not points:
        return pd.DataFrame()

    df = pd.DataFrame(points)
    if "measured_on" not in df.columns:
        return pd.DataFrame()
    df["measured_on"] = pd.to_datetime(df["measured_on"], errors="coerce")
    df = df.dropna(subset=["measured_on"]).sort_values("measured_on")
    return df.set_index("measured_on")


def monthly_df(labels, **series):
    """Side-by-side monthly series for st.bar_chart / st.line_chart."""
    df = pd.DataFrame(series)
    df.index = pd.Index(labels, name="bulan")
    return df


def error_detail(e: requests.HTTPError):
    """Best-effort message from a failed API call; the body may not be JSON."""
    if e.response is None or not e.response.content:
        return e
    try:
        body = e.response.json()
    except ValueError:
        return e.response.text
    if isinstance(body, dict):
        return body.get("detail", e.response.text)
    return body

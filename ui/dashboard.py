from typing import List

import altair as alt
import pandas as pd
import requests
import streamlit as st

from domain.models import DEFAULT_PERIOD_DAYS, PERIOD_OPTIONS
from domain.stats import AggregateStats
from domain.techniques import RankedTechnique
from infrastructure.api import ApiError
from infrastructure.session_cache import SessionCache
from ui.dashboard_helpers import DashboardMetrics, DaysSelector, load_dashboard
from ui.session import get_api_client


# --------------------------------------------------
# Public entry point (called from app.py)
# --------------------------------------------------

def render_dashboard_screen() -> None:
    st.title("Performance")

    with st.expander("Understanding these metrics", expanded=False):
        st.markdown(
            """
            **Every card compares the selected window with the window of the
            same length right before it.**

            **Submission rate**
            - Submissions per round sparred.

            **Defense index**
            - Escapes per tap. With no taps in the window it shows the raw
              number of escapes.

            **Cardio / Intensity**
            - Average self rating (1-5).

            **Top techniques**
            - Bars are relative to the most frequent technique.
            """
        )

    selector = _days_selector()
    days = _select_days(selector)

    st.caption(f"Overview of the last {days} days")

    cache = _session_cache()

    try:
        metrics = load_dashboard(get_api_client().fetch_sessions, days, cache)
    except (requests.RequestException, ApiError, ValueError) as e:
        _render_load_error(e, cache, days)
        return

    if st.button("Refresh", key="dashboard_refresh"):
        cache.invalidate(days)
        st.rerun()

    _render_key_metrics(metrics)

    col_left, col_right = st.columns(2)
    with col_left:
        _render_technique_list(
            "Top 3 attacks",
            metrics.top_attacks,
            "#59a14f",
            "No submissions logged.",
        )
    with col_right:
        _render_technique_list(
            "Top 3 submissions suffered",
            metrics.top_defenses,
            "#e15759",
            "Impenetrable defense!",
        )

    _render_combat_stats(metrics.current, metrics.previous)


# --------------------------------------------------
# State
# --------------------------------------------------

def _session_cache() -> SessionCache:
    if "dashboard_cache" not in st.session_state:
        st.session_state["dashboard_cache"] = SessionCache()
    return st.session_state["dashboard_cache"]


def _days_selector() -> DaysSelector:
    if "dashboard_days" not in st.session_state:
        st.session_state["dashboard_days"] = DaysSelector(DEFAULT_PERIOD_DAYS)
    return st.session_state["dashboard_days"]


# --------------------------------------------------
# UI components
# --------------------------------------------------

def _select_days(selector: DaysSelector) -> int:
    days = st.selectbox(
        "Period",
        PERIOD_OPTIONS,
        index=PERIOD_OPTIONS.index(selector.value)
        if selector.value in PERIOD_OPTIONS else 0,
        format_func=lambda d: f"Last {d} days",
    )
    selector.set(days)
    return selector.value


def _render_load_error(error: Exception, cache: SessionCache, days: int) -> None:
    response = getattr(error, "response", None)
    if response is not None and response.status_code == 401:
        st.error("Your session has expired. Please sign in again.")
        return

    st.error("Could not load metrics.")
    st.caption(str(error))

    if st.button("Retry", key="dashboard_retry"):
        cache.invalidate(days)
        st.rerun()


def _render_key_metrics(metrics: DashboardMetrics) -> None:
    cur = metrics.current
    deltas = metrics.deltas

    cols = st.columns(3)
    cols[0].metric(
        "Sessions",
        cur.total_sessions,
        _format_delta(deltas["total_sessions"], 0),
    )
    cols[1].metric(
        "Mat hours",
        f"{cur.total_hours:.1f} h",
        _format_delta(deltas["total_hours"], 1),
    )
    cols[2].metric(
        "Submission rate",
        f"{cur.sub_rate:.2f} /round",
        _format_delta(deltas["sub_rate"], 2),
    )

    cols = st.columns(3)
    cols[0].metric(
        "Defense index",
        f"{cur.defense_index:.1f} esc/tap",
        _format_delta(deltas["defense_index"], 1),
    )
    with cols[1]:
        _render_rating("Avg cardio", cur.avg_cardio, deltas["avg_cardio"])
    with cols[2]:
        _render_rating("Avg intensity", cur.avg_intensity, deltas["avg_intensity"])


def _render_rating(label: str, value: float, delta: float) -> None:
    st.metric(label, f"{value:.1f} / 5.0", _format_delta(delta, 1))
    st.progress(min(max(value / 5, 0.0), 1.0))


def _render_technique_list(
    title: str,
    techniques: List[RankedTechnique],
    color: str,
    empty_message: str,
) -> None:
    st.subheader(title)

    if not techniques:
        st.info(empty_message)
        return

    df = pd.DataFrame(
        [
            {
                "Rank": f"#{i + 1}",
                "Technique": t.name,
                "Count": t.count,
                "Share": t.percentage,
            }
            for i, t in enumerate(techniques)
        ]
    )

    chart = (
        alt.Chart(df)
        .mark_bar(color=color, cornerRadiusTopRight=2, cornerRadiusBottomRight=2)
        .encode(
            x=alt.X(
                "Share:Q",
                title=None,
                scale=alt.Scale(domain=[0, 100]),
                axis=None,
            ),
            y=alt.Y("Technique:N", title=None, sort=None),
            tooltip=[
                alt.Tooltip("Rank:N"),
                alt.Tooltip("Technique:N"),
                alt.Tooltip("Count:Q", title="Times"),
            ],
        )
        .properties(height=40 * len(techniques))
    )

    labels = chart.mark_text(align="left", dx=4).encode(
        text=alt.Text("Count:Q", format="d"),
    )

    st.altair_chart(chart + labels, width="stretch")


def _render_combat_stats(current: AggregateStats, previous: AggregateStats) -> None:
    st.subheader("Combat summary")

    rows = [
        ("Submissions", current.total_subs, previous.total_subs),
        ("Taps", current.total_taps, previous.total_taps),
        ("Takedowns", current.total_takedowns, previous.total_takedowns),
        ("Guard passes", current.total_passes, previous.total_passes),
        ("Sweeps", current.total_sweeps, previous.total_sweeps),
        ("Escapes", current.total_escapes, previous.total_escapes),
    ]

    df = pd.DataFrame(
        [
            {
                "Metric": label,
                "Current": cur,
                "Previous": prev,
                "Δ": _format_delta(cur - prev, 0) or "—",
            }
            for label, cur, prev in rows
        ]
    )

    st.dataframe(
        df,
        width="stretch",
        hide_index=True,
    )


# --------------------------------------------------
# Helpers
# --------------------------------------------------

# Format delta values with sign; None hides the indicator
def _format_delta(value: float, digits: int) -> str | None:
    if round(value, digits) == 0:
        return None
    if value > 0:
        return f"+{value:.{digits}f}"
    return f"{value:.{digits}f}"

import pandas as pd
import plotly.express as px
import requests
import streamlit as st

from domain.models import CLASS_TYPES, TRAINING_TYPES, Page, TrainingSession
from infrastructure.api import ApiClient, ApiError
from ui.session import get_api_client

PAGE_SIZE = 10


def render_trainings_screen() -> None:
    st.title("Training Journal")
    st.caption("Your history on the mat, newest first.")

    client = get_api_client()
    page_number = st.session_state.get("trainings_page", 0)

    try:
        page = client.list_trainings(page_number, PAGE_SIZE)
    except (requests.RequestException, ApiError, ValueError) as e:
        st.error("Could not load trainings.")
        st.caption(str(e))
        if st.button("Retry", key="trainings_retry"):
            st.rerun()
        return

    if not page.content:
        st.info("No trainings logged yet.")
        _render_pagination(page)
        return

    _render_duration_chart(page.content)

    for s in page.content:
        _render_training(client, s)

    _render_pagination(page)


# --------------------------------------------------
# UI components
# --------------------------------------------------

def _render_duration_chart(sessions: list[TrainingSession]) -> None:
    df = pd.DataFrame(
        [
            {
                "Date": s.session_date.strftime("%Y-%m-%d"),
                "Minutes": s.duration_minutes,
                "Type": TRAINING_TYPES.get(s.training_type or "", s.training_type or "—"),
            }
            for s in sessions
        ]
    )

    st.plotly_chart(
        px.bar(
            df.iloc[::-1],
            x="Date",
            y="Minutes",
            color="Type",
            title="Session duration (this page)",
        ),
        width="stretch",
    )


def _render_training(client: ApiClient, s: TrainingSession) -> None:
    class_label = CLASS_TYPES.get(s.class_type or "", s.class_type or "")
    type_label = TRAINING_TYPES.get(s.training_type or "", s.training_type or "")
    header = f"{s.session_date:%Y-%m-%d %H:%M} · {type_label} {class_label}".strip()

    with st.expander(header):
        cols = st.columns(4)
        cols[0].metric("Duration", f"{s.duration_minutes} min")
        cols[1].metric("Rounds", s.total_rounds)
        cols[2].metric("Cardio", s.cardio_rating)
        cols[3].metric("Intensity", s.intensity_rating)

        cols = st.columns(6)
        cols[0].metric("Subs", s.submissions)
        cols[1].metric("Taps", s.taps)
        cols[2].metric("Sweeps", s.sweeps)
        cols[3].metric("Takedowns", s.takedowns)
        cols[4].metric("Passes", s.guard_passes)
        cols[5].metric("Escapes", s.escapes)

        if s.techniques:
            st.markdown("**Drilled:** " + ", ".join(t.name for t in s.techniques))
        if s.submission_techniques:
            st.markdown(
                "**Finished with:** "
                + ", ".join(t.name for t in s.submission_techniques)
            )
        if s.submission_techniques_allowed:
            st.markdown(
                "**Caught by:** "
                + ", ".join(t.name for t in s.submission_techniques_allowed)
            )
        if s.description:
            st.markdown(f"**Notes:** {s.description}")

        _render_delete(client, s)


def _render_delete(client: ApiClient, s: TrainingSession) -> None:
    delete_key = f"confirm_delete_{s.id}"

    if st.button("Delete training", key=f"delete_{s.id}"):
        st.session_state[delete_key] = True

    if not st.session_state.get(delete_key):
        return

    st.warning("This will permanently remove this training.")
    cols = st.columns(2)

    with cols[0]:
        if st.button("Confirm delete", key=f"confirm_{s.id}"):
            try:
                client.delete_training(s.id)
            except (requests.RequestException, ApiError) as e:
                st.error(f"Delete failed: {e}")
                return
            del st.session_state[delete_key]
            # dashboard windows may include this training
            st.session_state.pop("dashboard_cache", None)
            st.success("Training deleted")
            st.rerun()

    with cols[1]:
        if st.button("Cancel", key=f"cancel_{s.id}"):
            del st.session_state[delete_key]
            st.info("Deletion cancelled.")


def _render_pagination(page: Page[TrainingSession]) -> None:
    cols = st.columns([1, 2, 1])

    with cols[0]:
        if st.button("← Previous", disabled=page.is_first):
            st.session_state["trainings_page"] = page.page - 1
            st.rerun()

    cols[1].caption(f"Page {page.page + 1} of {max(page.total_pages, 1)}")

    with cols[2]:
        if st.button("Next →", disabled=page.is_last):
            st.session_state["trainings_page"] = page.page + 1
            st.rerun()

import logging

import streamlit as st

from ui.dashboard import render_dashboard_screen
from ui.trainings import render_trainings_screen

logging.basicConfig(level=logging.INFO)


def main() -> None:
    st.set_page_config(
        page_title="Jiu-Jitsu Training Tracker",
        layout="wide",
    )

    page = st.sidebar.radio(
        "Navigation",
        [
            "Dashboard",
            "Trainings",
        ],
    )

    if page == "Dashboard":
        render_dashboard_screen()
    elif page == "Trainings":
        render_trainings_screen()


if __name__ == "__main__":
    main()

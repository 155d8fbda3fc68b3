import src.bootstrap_env  # must be first to set env/secrets
import streamlit as st

from src.config import load_settings
from src.logging_config import setup_logging
from src.ui.layout import current_area, setup_page, sidebar_navigation
from src.ui.pages import area as area_page
from src.ui.pages import home, viewer


def main() -> None:
    setup_page()
    setup_logging(load_settings().log_level)
    st.title("Plant Inventory Viewer")

    sidebar_navigation()

    area = current_area()
    if area is None:
        viewer.unmount_viewer()
        home.render()
        return

    area_page.render(area)


if __name__ == "__main__":
    main()

"""Temperature Matrix — Streamlit app for the year × month temperature view."""

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()

from tempmatrix.config import HEIGHT, WIDTH, default_source  # noqa: E402
from tempmatrix.loader import DataLoadError, load_dataset  # noqa: E402
from tempmatrix.models import Dataset, TempField  # noqa: E402
from tempmatrix.renderers.plotly_matrix import render_plotly_matrix  # noqa: E402
from tempmatrix.renderers.svg_html import render_matrix_html  # noqa: E402

st.set_page_config(
    page_title="Temperature Matrix",
    page_icon="🌡",
    layout="wide",
)

# --- Session state initialization ---

if "dataset" not in st.session_state:
    st.session_state.dataset = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "source" not in st.session_state:
    st.session_state.source = default_source()


@st.cache_data(show_spinner=False)
def _load(source: str) -> Dataset:
    return load_dataset(source)


# --- Input ---

with st.sidebar:
    st.header("Data")
    source = st.text_input(
        "CSV path or URL",
        value=st.session_state.source,
        help="Columns: date (YYYY-MM-DD), max_temperature, min_temperature",
    )
    submitted = st.button("Load", key="load_btn", width="stretch")

if submitted or st.session_state.dataset is None:
    st.session_state.source = source
    with st.spinner("Loading daily records..."):
        try:
            st.session_state.dataset = _load(source)
            st.session_state.error_msg = None
        except DataLoadError as e:
            st.session_state.dataset = None
            st.session_state.error_msg = str(e)

# --- Chart area ---

st.title("Monthly Temperature Matrix")

if st.session_state.error_msg:
    st.error(st.session_state.error_msg)
    st.stop()

dataset: Dataset = st.session_state.dataset
report = dataset.report
if report.skipped_rows or report.duplicate_dates:
    st.warning(
        f"{report.skipped_rows} malformed row(s) skipped, "
        f"{report.duplicate_dates} duplicate date(s) replaced by the later row."
    )
if not dataset.cells:
    st.info("No daily records found in this source.")
    st.stop()

html_page = render_matrix_html(dataset)
tab_matrix, tab_plotly = st.tabs(["Matrix", "Plotly"])
with tab_matrix:
    components.html(html_page, width=WIDTH + 40, height=HEIGHT + 120, scrolling=True)
with tab_plotly:
    st.plotly_chart(render_plotly_matrix(dataset, TempField.MAX), width="stretch")

st.download_button(
    "Download HTML",
    data=html_page,
    file_name="temperature_matrix.html",
    mime="text/html",
)

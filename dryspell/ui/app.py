"""Streamlit dashboard for Dry Spell Pricer."""

import sys
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import json
from datetime import date

import pandas as pd
import streamlit as st

from dryspell.core import ConfigurationError, DataSourceError, DroughtPricer, format_output, input_parser
from dryspell.core.actuarial import loss_cost_pct
from dryspell.core.formatter import results_to_frame
from dryspell.core.models import ThresholdConfig
from dryspell.data_sources import generate_daily_series, load_daily_csv, open_meteo_client
from dryspell.utils.config import settings
from dryspell.utils.constants import MONTH_NAMES, NO_OCCURRENCE
import dryspell.utils.logger  # noqa: F401

st.set_page_config(
    page_title="Consecutive Dry Days Analysis",
    page_icon="☀️",
    layout="wide",
)

DATA_SOURCES = ["Open-Meteo archive", "CSV upload", "Synthetic demo"]

# ============ INITIALIZE ============
if "last_result" not in st.session_state:
    st.session_state.last_result = None


def main():
    st.title("☀️ Consecutive Dry Days Analysis")
    st.markdown("*Parametric drought cover priced on the longest annual dry spell*")

    params = render_sidebar()
    if params is not None:
        run_analysis(*params)

    if st.session_state.last_result:
        render_results()


def render_sidebar():
    """Analysis form. Returns (source, inputs) when Analyze is pressed."""
    defaults = settings.analysis

    with st.sidebar:
        st.header("⚙️ Contract Settings")

        lon = st.number_input("Longitude (x) [degrees, one decimal]", value=defaults.longitude,
                              min_value=-180.0, max_value=180.0, step=0.1, format="%.1f")
        lat = st.number_input("Latitude (y) [degrees, one decimal]", value=defaults.latitude,
                              min_value=-90.0, max_value=90.0, step=0.1, format="%.1f")
        dry_limit = st.number_input("Dry day limit (mm)", value=defaults.dry_day_threshold_mm, min_value=0.0)
        thresholds_text = st.text_input(
            "Consecutive days (comma separated)",
            value=",".join(str(x) for x in defaults.consecutive_day_thresholds),
        )
        sum_insured = st.number_input("Sum insured per year", value=defaults.sum_insured, min_value=0.0)
        months = st.multiselect(
            "Months to analyse",
            options=list(MONTH_NAMES),
            default=defaults.season_months,
            format_func=lambda m: MONTH_NAMES[m],
        )

        st.divider()
        source = st.selectbox("Data source", DATA_SOURCES, index=0)
        uploaded = None
        if source == "CSV upload":
            uploaded = st.file_uploader("Daily series (date, precipitation_mm)", type=["csv"])

        if st.button("🔍 Analyze", type="primary", use_container_width=True):
            return source, uploaded, lat, lon, dry_limit, thresholds_text, sum_insured, months

        st.divider()
        st.caption("**Data Sources:**")
        st.caption("• Precipitation: Open-Meteo archive (ERA5)")
        st.caption("• Offline: CSV upload or synthetic series")
    return None


def run_analysis(source, uploaded, lat, lon, dry_limit, thresholds_text, sum_insured, months):
    """Validate inputs, load the series and price it."""
    try:
        config = ThresholdConfig(
            dry_day_threshold_mm=dry_limit,
            consecutive_day_thresholds=tuple(input_parser.parse_thresholds(thresholds_text)),
            sum_insured=sum_insured,
            season_months=frozenset(input_parser.parse_months(months)),
        )
    except ConfigurationError as e:
        st.error(f"Invalid settings: {e}")
        return

    with st.spinner("Pricing dry spell cover..."):
        try:
            if source == "CSV upload":
                if uploaded is None:
                    st.warning("Upload a CSV file first")
                    return
                series = load_daily_csv(uploaded)
                metadata = {"source": uploaded.name}
            elif source == "Synthetic demo":
                series = generate_daily_series()
                metadata = {"source": "synthetic"}
            else:
                series = open_meteo_client.get_daily_series(lat, lon)
                metadata = {"source": "open-meteo", "latitude": lat, "longitude": lon}

            st.session_state.last_result = DroughtPricer().price(series, config, metadata=metadata)
        except DataSourceError as e:
            st.error(f"Could not load precipitation data: {e}")


def render_results():
    """Charts, report and downloads for the last analysis."""
    result = st.session_state.last_result

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Season days", result.record_count)
    with col2:
        st.metric("Years", len(result.years))
    with col3:
        st.metric("Thresholds priced", len(result.results))

    tab1, tab2, tab3 = st.tabs(["📊 Annual Payouts", "📝 Report", "📋 Data"])

    with tab1:
        render_charts(result)

    with tab2:
        st.code(format_output(result, "text"), language=None)

    with tab3:
        frame = results_to_frame(result.results)
        st.dataframe(frame, use_container_width=True)
        st.download_button(
            "Download yearly payouts (CSV)",
            data=frame.to_csv(index=False),
            file_name="dry_spell_payouts.csv",
            mime="text/csv",
        )
        st.download_button(
            "Download full result (JSON)",
            data=format_output(result, "json"),
            file_name=f"dry_spell_{date.today().isoformat()}.json",
            mime="application/json",
        )
        with st.expander("Raw JSON"):
            st.json(json.loads(format_output(result, "json")))


def render_charts(result):
    """One bar chart per surviving threshold: indemnity by year."""
    if not result.has_data:
        st.info("No precipitation data available for the selected months.")
        return
    if result.all_skipped:
        st.info(f"No threshold was breached in the historical record ({NO_OCCURRENCE}).")
        return

    for r in result.results:
        st.markdown(f"**Annual payouts (X = {r.threshold})**")
        chart = pd.DataFrame(
            {"Amount paid": [o.indemnity for o in r.year_outcomes]},
            index=[str(o.year) for o in r.year_outcomes],
        )
        st.bar_chart(chart, color=settings.ui.chart_color)

        cost = loss_cost_pct(r)
        period = NO_OCCURRENCE if r.return_period_years is None else f"{r.return_period_years:.2f} years"
        st.caption(
            f"Probability {r.probability * 100:.2f}% · Return period {period} · "
            f"Cost {'undefined' if cost is None else f'{cost:.2f}%'}"
        )


if __name__ == "__main__":
    main()

"""SmartSpend browser app. Run with: streamlit run src/smartspend/ui/app.py"""
import asyncio

import streamlit as st

from smartspend.config import ConfigManager
from smartspend.llm import StatementAnalyzer, TextStatement, ImageStatement
from smartspend.session import SessionController
from smartspend.ui.charts import breakdown_chart, summary_frame, transactions_frame
from smartspend.utils import format_currency, configure_logging

st.set_page_config(page_title="SmartSpend AI (INR)", layout="wide", page_icon="💰")


def get_controller() -> SessionController:
    """One controller (and so one transaction list) per browser session."""
    if "controller" not in st.session_state:
        manager = ConfigManager()
        config = manager.load_config()
        if not config:
            st.error("No Gemini API key found. Set GEMINI_API_KEY and restart the app.")
            st.stop()

        is_valid, message = manager.validate_config(config)
        if not is_valid:
            st.error(f"Invalid configuration: {message}")
            st.stop()

        configure_logging(config.settings)
        analyzer = StatementAnalyzer(config.gemini_api_key, config.settings)
        st.session_state.controller = SessionController(analyzer)
        st.session_state.confirm_clear = False
    return st.session_state.controller


controller = get_controller()
settings = controller.analyzer.settings


def money(amount) -> str:
    return format_currency(amount, settings.currency_symbol, settings.digit_grouping)


def analyze(statement) -> None:
    with st.spinner("Analyzing with Gemini..."):
        asyncio.run(controller.analyze(statement))
    # Header total was drawn before the request finished
    st.rerun()


# --- Header ---
aggregated = controller.aggregate()

title_col, clear_col, total_col = st.columns([3, 1, 1])
title_col.title(f"💰 {settings.app_name} ({settings.currency})")
total_col.metric("Total", money(aggregated.grand_total))

if controller.state.transactions:
    if not st.session_state.confirm_clear:
        if clear_col.button("Clear All", use_container_width=True):
            st.session_state.confirm_clear = True
            st.rerun()
    else:
        clear_col.warning("Are you sure you want to clear all data?")
        yes_col, no_col = clear_col.columns(2)
        if yes_col.button("Yes, clear", type="primary"):
            controller.reset(confirmed=True)
            st.session_state.confirm_clear = False
            st.session_state.pop("pasted_text", None)
            st.rerun()
        if no_col.button("Cancel"):
            controller.reset(confirmed=False)
            st.session_state.confirm_clear = False
            st.rerun()

# --- Import ---
st.subheader(f"📥 Import {settings.statement_region} Bank Statement")
mode = st.radio("Input", ["Upload Image", "Paste Text"], horizontal=True, label_visibility="collapsed")

if mode == "Upload Image":
    extensions = sorted({m.split("/")[1] for m in settings.allowed_mime_types} | {"jpg"})
    uploaded = st.file_uploader(
        f"PNG, JPG or PDF Image (Max {settings.max_upload_mb}MB)",
        type=extensions
    )
    if st.button("Analyze Image", type="primary", disabled=uploaded is None):
        analyze(ImageStatement.from_bytes(uploaded.getvalue(), uploaded.type))
else:
    pasted = st.text_area(
        "Statement text",
        key="pasted_text",
        height=160,
        placeholder=f"Paste transaction descriptions from your {settings.statement_region} bank statement here..."
    )
    if st.button("⚡ Analyze Text", type="primary", disabled=not pasted.strip()):
        analyze(TextStatement(pasted))

if controller.state.error:
    st.error(controller.state.error)

# --- Results ---
aggregated = controller.aggregate()

if controller.state.transactions:
    chart_col, table_col = st.columns([1, 2])

    with chart_col:
        st.subheader("Spending Breakdown")
        st.plotly_chart(breakdown_chart(aggregated.summaries, money), use_container_width=True)
        st.dataframe(summary_frame(aggregated, money), hide_index=True, use_container_width=True)

    with table_col:
        st.subheader(f"Transactions ({aggregated.transaction_count})")
        st.dataframe(
            transactions_frame(controller.state.transactions),
            hide_index=True,
            use_container_width=True,
            column_config={
                "Amount": st.column_config.NumberColumn(format=f"{settings.currency_symbol}%.2f")
            }
        )
else:
    st.info("Upload a statement image or paste statement text to see your spending breakdown.")

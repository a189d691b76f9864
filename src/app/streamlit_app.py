"""
Synergy Engine -- Streamlit UI
==============================

A single form: enter a target value and two integer bounds, get the
containment status, a few statistics, and a short LLM commentary about the
numbers.

Run with::

    streamlit run src/app/streamlit_app.py
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

# Ensure project root is on sys.path (needed for Streamlit Cloud deployment)
_PROJECT_ROOT = str(Path(__file__).resolve().parent.parent.parent)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

import streamlit as st

# ---------------------------------------------------------------------------
# Project imports
# ---------------------------------------------------------------------------

from core import __version__
from core.analysis import AnalysisResult, InputValidationError, parse_inputs
from core.insight import InsightRequestor
from core.session import AnalysisSession
from core.settings import configure_logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_TARGET = "3.1415"
DEFAULT_ALPHA = "47000"
DEFAULT_OMEGA = "53000"

RawInputs = Tuple[str, str, str]


# ---------------------------------------------------------------------------
# Session-state initialisation
# ---------------------------------------------------------------------------

def _init_session_state() -> None:
    """Ensure every required session-state key exists.

    The event loop lives until Reset closes it: async SDK clients bind to
    the loop that first used them, so the requestor and loop are created
    together and never shared between sessions.
    """
    if "analysis_session" not in st.session_state:
        st.session_state["event_loop"] = asyncio.new_event_loop()
        st.session_state["analysis_session"] = AnalysisSession(
            InsightRequestor.from_settings()
        )
    defaults = {
        "pending_inputs": None,
        "validation_message": "",
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


def _discard_session() -> None:
    """Close this browser session's event loop; the next run builds a fresh one."""
    loop: Optional[asyncio.AbstractEventLoop] = st.session_state.pop("event_loop", None)
    st.session_state.pop("analysis_session", None)
    if loop is not None and not loop.is_closed():
        loop.close()


def _session() -> AnalysisSession:
    return st.session_state["analysis_session"]


def _is_busy() -> bool:
    return _session().busy or st.session_state["pending_inputs"] is not None


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

def _queue_submission(raw: RawInputs) -> None:
    """Validate up front; only valid input puts the form into its busy state."""
    try:
        parse_inputs(*raw)
    except InputValidationError as exc:
        st.session_state["validation_message"] = exc.message
        return
    st.session_state["validation_message"] = ""
    st.session_state["pending_inputs"] = raw
    st.rerun()


def _run_pending_submission() -> None:
    raw: Optional[RawInputs] = st.session_state["pending_inputs"]
    if raw is None:
        return

    session = _session()
    loop: asyncio.AbstractEventLoop = st.session_state["event_loop"]
    try:
        with st.spinner("Processing..."):
            loop.run_until_complete(session.submit(*raw))
    except InputValidationError as exc:
        st.session_state["validation_message"] = exc.message
    finally:
        st.session_state["pending_inputs"] = None
    st.rerun()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_form() -> None:
    st.subheader("Parameters")
    busy = _is_busy()

    with st.form("analysis_form", border=True):
        target = st.text_input(
            "Target Float Value",
            value=DEFAULT_TARGET,
            placeholder="e.g. 42.75",
            key="input_target",
        )
        c1, c2 = st.columns(2)
        with c1:
            alpha = st.text_input("Bound Alpha", value=DEFAULT_ALPHA, placeholder="0", key="input_alpha")
        with c2:
            omega = st.text_input("Bound Omega", value=DEFAULT_OMEGA, placeholder="100", key="input_omega")

        submitted = st.form_submit_button(
            "Processing..." if busy else "Analyze Synergy",
            type="primary",
            disabled=busy,
            use_container_width=True,
        )

    if submitted and not busy:
        _queue_submission((target, alpha, omega))

    if st.session_state["validation_message"]:
        st.error(st.session_state["validation_message"])


def _render_result(result: AnalysisResult) -> None:
    with st.container(border=True):
        head, badge = st.columns([3, 1])
        with head:
            st.markdown("#### Mathematical Status")
        with badge:
            colour = "green" if result.is_contained else "red"
            st.markdown(f":{colour}[**{result.containment_label}**]")

        st.progress(result.display_progress / 100)
        low, mid, high = st.columns(3)
        low.caption(str(result.bound_low))
        mid.caption(f"{result.progress_text}% position")
        high.caption(str(result.bound_high))

        m1, m2 = st.columns(2)
        m1.metric("Range Breadth", result.range)
        m2.metric("Float Status", result.number_kind)

    with st.container(border=True):
        st.markdown("#### AI Synergy Insight")
        st.markdown(f"> *\"{result.insight_text}\"*")


def _render_placeholder() -> None:
    with st.container(border=True):
        st.markdown("### Awaiting input parameters...")
        st.caption("Enter your values to unlock mathematical resonance data.")


def _render_sidebar() -> None:
    session = _session()
    requestor = session.requestor
    with st.sidebar:
        st.title("Synergy Engine")
        st.caption(f"v{__version__}")
        st.divider()
        st.markdown(f"**Provider:** {requestor.provider.provider_name}")
        st.markdown(f"**Model:** {requestor.model}")

        summary = requestor.audit.summary()
        if summary["total_calls"]:
            st.divider()
            st.markdown("**Insight calls:**")
            st.caption(f"Calls: {summary['total_calls']}")
            st.caption(f"Fallbacks: {summary['fallbacks']}")
            st.caption(f"Latency total: {summary['total_latency_ms']} ms")

        st.divider()
        if st.button("Reset", key="btn_reset", disabled=_is_busy()):
            session.reset()
            _discard_session()
            st.session_state["validation_message"] = ""
            st.rerun()


# ===================================================================
# Main application
# ===================================================================

def main() -> None:
    """Entry point for the Streamlit Synergy Engine form."""

    st.set_page_config(
        page_title="Synergy Engine",
        page_icon="🔮",
        layout="wide",
    )
    configure_logging()
    _init_session_state()
    _render_sidebar()

    st.title("Synergy Engine")
    st.markdown("Explore the relationship between your values and constraints.")

    col_form, col_result = st.columns([5, 7])
    with col_form:
        _render_form()
    with col_result:
        result = _session().result
        if result is not None:
            _render_result(result)
        else:
            _render_placeholder()

    # Runs after the form is drawn so the disabled button is visible meanwhile
    _run_pending_submission()

    st.caption("Built with Gemini & high precision computational logic")


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()

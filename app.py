import json
from decimal import Decimal
import io
from contextlib import redirect_stdout

import streamlit as st

# Local solver
from lpsimplex.cli import model_from_config
from lpsimplex.graph import plot_2d
from lpsimplex.simplex import EPS, fmt_out, simplex

st.set_page_config(page_title="Simplex Visualizer", layout="wide")
st.title("Two-Phase Simplex (Slack Form) — Solve & Visualize")

# Sidebar options
with st.sidebar:
    st.header("Options")
    eps = st.number_input("Tolerance (eps)", value=EPS, format="%.1e", min_value=0.0)
    show_graph = st.checkbox("Show graph (2 variables only)", value=True)

# maximize c^T x subject to A x <= b, x >= 0; negative b entries trigger Phase I
default_json = {
    "c": [1, -1],
    "A": [[2, -1], [1, -5], [-1, -1]],
    "b": [2, -4, -1],
}

st.subheader("Model JSON")
json_text = st.text_area("Edit LP JSON here", json.dumps(default_json, indent=2), height=260)

col_run, col_reset = st.columns([1, 1])
run = col_run.button("Solve")
if col_reset.button("Reset to template"):
    st.rerun()


if run:
    # Parse JSON
    try:
        cfg = json.loads(json_text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        st.error(f"Invalid JSON: {e}")
    else:
        try:
            standard = model_from_config(cfg)
        except ValueError as e:
            st.error(f"Invalid LP fields: {e}")
        else:
            # Capture solver verbose output
            buf = io.StringIO()
            with redirect_stdout(buf):
                res = simplex(standard, eps=eps, verbose=True)
            text_out = buf.getvalue()

            # Single-column layout: Iterations -> Result -> Graph
            st.subheader("Iterations / Tableaux")
            st.code(text_out)
            st.subheader("Result")
            st.json({
                "status": res.status,
                "optimal_value": fmt_out(res.objective) if res.objective is not None else None,
                "solution": [fmt_out(v) for v in (res.solution or [])],
                "iterations": res.iterations,
                "phase1": res.details.get("phase1", False),
            })
            # Infinite many solutions note
            if res.details.get("alternate_optimal"):
                st.info("Infinite many optimal solutions along an edge (alternate optimal).")

            st.subheader("Graph")
            if show_graph and standard.n == 2:
                fig = plot_2d(standard, res)
                if fig is not None:
                    st.pyplot(fig)
                else:
                    st.info("No feasible region to plot or numerical issue.")
            else:
                st.info("Graph available only for 2 variables.")

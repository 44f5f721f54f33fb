"""Streamlit dashboard for agriseq-merger."""

import sys
from pathlib import Path

# Ensure the src/ directory is on the Python path so that agriseq is
# importable when Streamlit runs this file without the package installed.
_src_dir = str(Path(__file__).resolve().parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

import pandas as pd
import streamlit as st

from agriseq.core import PipelineConfig, PipelineSession
from agriseq.errors import NoDataAvailable
from agriseq.merge import MATCH_STRATEGIES
from agriseq.models import GENOMIC_SEQUENCE
from agriseq.output import records_to_bytes


def _session() -> PipelineSession:
    if "session" not in st.session_state:
        st.session_state["session"] = PipelineSession(PipelineConfig.from_env())
    return st.session_state["session"]


def main():
    st.set_page_config(page_title="FASTQ + FAOSTAT Merger", layout="wide")
    st.title("Training Data Builder")
    st.markdown(
        "Merge **FASTQ** sequence features with **FAOSTAT** statistics and a "
        "sample-mapping file into one training CSV."
    )

    session = _session()
    cfg = session.config

    with st.sidebar:
        st.header("Inputs")
        work_dir = st.text_input("Working directory", value=cfg.work_dir)
        archive = st.text_input("FASTQ archive (path or URL)", value=cfg.archive)
        skip_extract = st.checkbox("Use pre-extracted files", value=cfg.skip_extract)
        extract_dir = st.text_input("Extraction directory", value=cfg.extract_dir)
        faostat = st.text_input("FAOSTAT CSV (path or URL)", value=cfg.faostat)
        mapping = st.text_input("Mapping file (path or URL)", value=cfg.mapping)
        match_strategy = st.selectbox(
            "Mapping match", list(MATCH_STRATEGIES),
            index=list(MATCH_STRATEGIES).index(cfg.match_strategy),
            help="'exact' disables substring fallback matching",
        )

    if st.button("Build training data", type="primary"):
        with st.spinner("Processing..."):
            try:
                session.run(
                    work_dir=work_dir.strip() or ".",
                    archive=archive.strip(),
                    skip_extract=skip_extract,
                    extract_dir=extract_dir.strip(),
                    faostat=faostat.strip(),
                    mapping=mapping.strip(),
                    match_strategy=match_strategy,
                )
            except NoDataAvailable as exc:
                st.error(str(exc))

    if not session.has_data:
        st.info("No processed data yet.")
        return

    result = session.latest
    summary = result.summary

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total", summary.total_records)
    col2.metric("Sequences", summary.sequence_records)
    col3.metric("FAOSTAT", summary.faostat_records)
    col4.metric("Sources", summary.unique_sources)

    df = pd.DataFrame([r.to_dict() for r in result.records])
    st.dataframe(df, use_container_width=True)

    seq = df[df["data_type"] == GENOMIC_SEQUENCE]
    if not seq.empty:
        st.subheader("GC content distribution")
        gc = pd.to_numeric(seq["gc_content"])
        counts = pd.cut(gc, bins=list(range(0, 101, 10)), include_lowest=True).value_counts(sort=False)
        counts.index = counts.index.astype(str)
        st.bar_chart(counts)

    st.download_button(
        label="Download CSV",
        data=records_to_bytes(result.records),
        file_name=result.output_path.name if result.output_path else "MODEL_TRAINING_DATA.csv",
        mime="text/csv",
    )
    st.json(result.report)


if __name__ == "__main__":
    main()

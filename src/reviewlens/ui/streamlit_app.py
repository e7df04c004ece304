"""Streamlit dashboard for ReviewLens."""

import json
import logging
from functools import partial

import streamlit as st

from reviewlens.core.aspect import parse_taxonomy
from reviewlens.core.config import settings
from reviewlens.core.constants import UIConstants
from reviewlens.core.errors import ReviewLensError
from reviewlens.core.models import PipelineOptions, SentimentLabel
from reviewlens.core.pipeline import run_analysis
from reviewlens.core.scoring import sentiment_distribution
from reviewlens.services.llm import LLMServiceFactory
from reviewlens.utils.data_prep import SAMPLE_DATASETS, prepare_export, simulate_large_corpus

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

_SENTIMENT_ICONS = {
    SentimentLabel.POSITIVE: "🟢",
    SentimentLabel.NEGATIVE: "🔴",
    SentimentLabel.NEUTRAL: "⚪",
}

# Page configuration
st.set_page_config(
    page_title="ReviewLens - Aspect Sentiment",
    page_icon="🔍",
    layout="wide"
)

st.title("🔍 ReviewLens - Aspect-Based Sentiment Analysis")
st.write("Discover what customers talk about and how they feel about it, clause by clause.")

# Sidebar: data input
with st.sidebar:
    st.header("📥 Data Input")
    domain = st.selectbox("Sample dataset", list(SAMPLE_DATASETS))
    col1, col2 = st.columns(2)
    if col1.button("Load sample"):
        st.session_state["corpus_text"] = "\n".join(SAMPLE_DATASETS[domain])
    if col2.button(f"Simulate {UIConstants.SIMULATED_REVIEW_COUNT:,}"):
        st.session_state["corpus_text"] = "\n".join(simulate_large_corpus(SAMPLE_DATASETS[domain]))

    uploaded = st.file_uploader("Or upload a .txt file (one review per line)", type=["txt"])
    taxonomy_file = st.file_uploader("Optional taxonomy (.yaml)", type=["yaml", "yml"])

    st.subheader("⚙️ Settings")
    signal_limit = st.slider("Signals sent to discovery", 20, 200, settings.signal_limit, step=10)
    clamp = st.checkbox("Clamp extreme sentiment without intensifiers", value=settings.clamp_sentiment)

corpus_text = st.text_area("Reviews (one per line)", value=st.session_state.get("corpus_text", ""), height=200)
if uploaded is not None:
    corpus_text = uploaded.getvalue().decode("utf-8", errors="replace")

lines = [line for line in corpus_text.splitlines() if line.strip()]
st.caption(f"{len(lines)} lines detected" if lines else "Paste reviews or load a sample dataset.")

if st.button("📊 Analyze Reviews", disabled=not lines):
    st.session_state.pop("result", None)
    progress_bar = st.progress(0, text="Scanning vocabulary signals...")
    options = PipelineOptions.from_settings(signal_limit=signal_limit, clamp_sentiment=clamp)
    try:
        if taxonomy_file is not None:
            taxonomy = parse_taxonomy(taxonomy_file.getvalue(), source=taxonomy_file.name)
            result = run_analysis(lines, taxonomy=taxonomy, options=options,
                                  on_progress=lambda pct: progress_bar.progress(pct, text=f"Local pass: {pct}%"),
                                  taxonomy_source="file")
        else:
            llm_service = LLMServiceFactory.create()
            discover = partial(llm_service.discover_taxonomy, review_count=len(lines))
            result = run_analysis(lines, discover=discover, options=options,
                                  on_progress=lambda pct: progress_bar.progress(pct, text=f"Local pass: {pct}%"),
                                  taxonomy_source=llm_service.taxonomy_source)
        st.session_state["result"] = result
    except ReviewLensError as e:
        logger.error(f"Analysis failed: {e}")
        st.error(f"Analysis failed: {e}. You can retry with the same input.")
    finally:
        progress_bar.empty()

result = st.session_state.get("result")
if result is not None:
    for warning in result.warnings:
        st.warning(warning)

    # Top metric cards
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Reviews Analyzed", f"{result.processed_count:,}")
    m2.metric("Aspects Detected", len(result.aspects))
    m3.metric("Mentions Found", f"{result.total_segments:,}")
    m4.metric("Net Sentiment", f"{result.overall_net_sentiment:+.2f}")

    left, right = st.columns(2)
    with left:
        st.subheader("Aspect Sentiment Distribution")
        distribution = sentiment_distribution(result.aspects)
        if distribution:
            rows = [{"aspect": name, **counts} for name, counts in distribution.items()]
            st.bar_chart(rows, x="aspect", y=[label.value for label in SentimentLabel])
        selected = st.selectbox("Filter reviews by aspect", ["All"] + [a.name for a in result.aspects])
        selected = None if selected == "All" else selected

    with right:
        st.subheader(f"{selected} Details" if selected else "Aspect Summary")
        if selected:
            stats = result.get_aspect(selected)
            c1, c2, c3 = st.columns(3)
            c1.metric("Positive", stats.positive)
            c2.metric("Negative", stats.negative)
            c3.metric("Neutral", stats.neutral)
            st.write("**Keywords:** " + ", ".join(stats.keywords))
            st.write(f"**Confidence:** {stats.confidence:.2f} ({stats.review_count} reviews, "
                     f"{len(stats.trigger_counts)} distinct triggers)")
            st.info(f"Based on {stats.count} segments, this aspect has a {stats.perception} perception.")
        else:
            for stats in result.aspects:
                st.write(f"**{stats.name}**: {stats.net_sentiment:+.2f} · {stats.count} segs · "
                         f"confidence {stats.confidence:.2f}  \n_{', '.join(stats.keywords[:3])}_")

    with st.expander("📈 Vocabulary signals"):
        st.dataframe([
            {"token": w.token, "kind": w.kind, "count": w.count, "df": w.document_frequency, "score": round(w.score, 2)}
            for w in result.top_words
        ])

    # Review list with pagination
    filtered = result.reviews_for_aspect(selected)
    total_pages = max(1, -(-len(filtered) // UIConstants.REVIEWS_PER_PAGE))
    page = st.number_input("Page", min_value=1, max_value=total_pages, value=1, step=1)
    st.caption(f"{len(filtered)} reviews · page {page} of {total_pages}")
    for review in result.page(filtered, page):
        with st.container(border=True):
            st.caption(review.review_id)
            for segment in review.segments:
                if selected and segment.aspect_category != selected:
                    continue
                icon = _SENTIMENT_ICONS[segment.sentiment]
                st.write(f"{icon} **{segment.aspect_category}** ({segment.sentiment_score:+.2f}, "
                         f"trigger: `{segment.trigger_word}`): {segment.segment_text}")

    st.download_button("⬇️ Download JSON", json.dumps(prepare_export(result), indent=2, ensure_ascii=False),
                       file_name="reviewlens_analysis.json", mime="application/json")

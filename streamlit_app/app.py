from __future__ import annotations

import calendar

import altair as alt
import pandas as pd
import streamlit as st

from transaction_insights.aggregate import reports
from transaction_insights.config import get_settings
from transaction_insights.db import connect
from transaction_insights.query.params import parse_list_params, parse_month_params

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Transaction Insights", layout="wide")
st.title("📊 Transaction Insights Dashboard")

# =====================================================
# MongoDB connection
# =====================================================
settings = get_settings()


@st.cache_resource
def get_collection():
    """Open one Mongo client per Streamlit server process."""
    client, db = connect(settings)
    # fail fast: ensure the client can reach the server
    client.admin.command("ping")
    return db[settings.mongo_collection]


try:
    collection = get_collection()
except Exception as exc:  # pragma: no cover - runtime failure handling
    st.error(f"Unable to connect to MongoDB: {exc}")
    st.stop()


def kpi(label: str, value) -> None:
    """Display a simple KPI metric in the dashboard."""
    st.metric(label, value)


# =====================================================
# Month selector
# =====================================================
month_names = list(calendar.month_name)[1:]
month_label = st.selectbox("Month", month_names, index=2)
month = month_names.index(month_label) + 1
match = parse_month_params(month).predicate

report = reports.combined_report(collection, match)

# =====================================================
# SECTION 1: STATISTICS
# =====================================================
st.header(f"📌 Statistics — {month_label}")

stats = report.statistics
c1, c2, c3 = st.columns(3)
with c1:
    kpi("Total Sale Amount", f"{stats.total_sale_amount:,.2f}")
with c2:
    kpi("Sold Items", stats.total_sold_items)
with c3:
    kpi("Not Sold Items", stats.total_not_sold_items)

st.divider()

# =====================================================
# SECTION 2: CHARTS
# =====================================================
left, right = st.columns(2)

with left:
    st.subheader("📈 Price Ranges")
    df_bar = pd.DataFrame([b.model_dump() for b in report.bar_chart])
    chart_bar = (
        alt.Chart(df_bar)
        .mark_bar()
        .encode(
            x=alt.X("range:N", sort=list(df_bar["range"]), title="Price range"),
            y=alt.Y("count:Q", title="Items"),
            tooltip=["range:N", "count:Q"],
        )
        .properties(height=320)
    )
    st.altair_chart(chart_bar, width="stretch")

with right:
    st.subheader("🥧 Categories")
    df_pie = pd.DataFrame([c.model_dump() for c in report.pie_chart])
    if df_pie.empty:
        st.info("No transactions for this month.")
    else:
        chart_pie = (
            alt.Chart(df_pie)
            .mark_arc()
            .encode(
                theta=alt.Theta("count:Q"),
                color=alt.Color("category:N", title="Category"),
                tooltip=["category:N", "count:Q"],
            )
            .properties(height=320)
        )
        st.altair_chart(chart_pie, width="stretch")

st.divider()

# =====================================================
# SECTION 3: TRANSACTIONS
# =====================================================
st.header("🧾 Transactions")

search = st.text_input("Search title, description or price")
per_page = st.selectbox("Per page", [10, 25, 50], index=0)
page = st.number_input("Page", min_value=1, value=1, step=1)

listing = reports.list_transactions(
    collection, parse_list_params(month, search, page, per_page)
)

if not listing.transactions:
    st.info("No transactions match.")
else:
    df_tx = pd.DataFrame(
        [t.model_dump(by_alias=True, exclude={"object_id", "image"}) for t in listing.transactions]
    )
    df_tx["dateOfSale"] = pd.to_datetime(df_tx["dateOfSale"]).dt.strftime("%Y-%m-%d")
    st.dataframe(df_tx, width="stretch", hide_index=True)
    st.caption(f"Page {listing.page} of {listing.total_pages} • {listing.total} transactions")

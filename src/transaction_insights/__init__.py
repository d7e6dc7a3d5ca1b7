"""transaction_insights package.

Loads transaction records from an upstream JSON feed into MongoDB and
serves read-only reports over them: a searchable paginated listing,
monthly sale statistics, a price histogram and a category breakdown.

Architecture:
- `ingest` fetches, cleans (pandas) and validates (Pydantic) the feed, then
  swaps it into MongoDB atomically
- `query` builds the month and search predicates
- `aggregate` runs the pipelines, fanning independent reads out with Dask
- `api` exposes the reports over FastAPI; `cli` and the Streamlit app reuse
  the same functions
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

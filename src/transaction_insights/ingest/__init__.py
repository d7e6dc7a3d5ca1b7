"""Seed ingestion: fetch the upstream feed, clean it and load it into MongoDB."""

"""Report aggregation.

Pipeline builders, the concurrent fan-out helper and the report functions that
run them against the transactions collection and shape the payloads.
"""

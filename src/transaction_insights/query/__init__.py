"""Query construction.

Filter predicates over the transactions collection and the step that turns
raw query-string values into validated, typed parameters.
"""

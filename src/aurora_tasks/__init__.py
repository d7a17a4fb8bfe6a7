"""
Aurora Tasks: a local personal task tracker.

The core (store, tags, stats, views, ranking) has no web dependencies; the
FastAPI app in aurora_tasks.main is a thin presentation layer over it. The
app is not imported here so that importing the core never builds it.
"""

__version__ = "0.1.0"

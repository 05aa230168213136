"""
Core package for the AI tool performance dashboard.

Submodules provide record loading, filtering, daily aggregation, dashboard
state and user interface rendering helpers that are orchestrated by the
top-level `app.py`.
"""

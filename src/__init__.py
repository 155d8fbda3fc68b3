"""
Core package for the plant inventory viewer.

Submodules provide sheet retrieval, grid reshaping, filtering, and user
interface rendering helpers that are orchestrated by the top-level `app.py`.
"""

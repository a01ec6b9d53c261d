"""Core logic for Schema Workbench.

The Gradio UI lives in `app.py`. This package contains the pieces it wires up:
- field kinds, schema models and rule parsing
- validators built from rule strings
- the schema editor drafts and the in-memory store
- search/sort/pagination and CSV export for the data table
"""

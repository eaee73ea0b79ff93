"""Application shells around the Qdrant SDK.

- cli: Typer CLI
"""

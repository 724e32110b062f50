"""Markup tokenization and line accumulation."""

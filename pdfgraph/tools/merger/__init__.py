"""Merge tool."""

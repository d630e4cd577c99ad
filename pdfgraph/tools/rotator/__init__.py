"""Rotate tool."""

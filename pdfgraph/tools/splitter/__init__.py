"""Split tool."""

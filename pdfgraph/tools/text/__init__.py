"""Text extraction tool."""

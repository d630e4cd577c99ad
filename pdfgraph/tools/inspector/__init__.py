"""Document inspection tool."""

"""Image recompression tool."""

from .rotator import normalize_rotation, rotate_pages, rotate_pdf

__all__ = ["normalize_rotation", "rotate_pages", "rotate_pdf"]

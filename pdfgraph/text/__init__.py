from .extractor import extract_page_texts, extract_text

__all__ = ["extract_page_texts", "extract_text"]

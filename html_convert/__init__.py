"""
HTML Convert
============

Convert HTML documents with simple ``{{key}}`` placeholders into images or
PDF files by rendering them in a headless browser.

This package provides:
- Template loading with literal placeholder substitution
- A render engine capability with a Playwright (Chromium) implementation
- The HTMLConverter orchestration class returning base64 payloads
"""

__version__ = "1.0.0"
__author__ = "HTML Convert Team"

from html_convert.exceptions import ConversionError, ReadError, RenderError
from html_convert.core.converter import (
    HTMLConverter,
    convert_html_to_image,
    convert_html_to_pdf,
)

__all__ = [
    "ConversionError",
    "ReadError",
    "RenderError",
    "HTMLConverter",
    "convert_html_to_image",
    "convert_html_to_pdf",
]

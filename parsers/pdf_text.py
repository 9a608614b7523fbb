"""
PDF -> text extraction (pdfplumber)
"""

from typing import BinaryIO, Union
from pathlib import Path
import logging
import pdfplumber

logger = logging.getLogger(__name__)


def extract_pdf_text(source: Union[str, Path, BinaryIO]) -> str:
    """
    Concatenate the text layer of every page.

    Layout is irrelevant here: the parser flattens all whitespace anyway.
    """
    with pdfplumber.open(source) as pdf:
        pages = [page.extract_text() or '' for page in pdf.pages]

    logger.debug(f"Extracted {len(pages)} page(s) from {source}")
    return "\n".join(pages)

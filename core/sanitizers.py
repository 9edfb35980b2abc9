# core/sanitizers.py
"""
Input sanitization for the portal.

All free text typed by students and admins passes through these
functions before being stored.
"""
import re
from typing import Optional


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_title(title: Optional[str]) -> str:
    """
    Sanitize titles: max 255 characters, single line.
    """
    text = sanitize_text(title, max_length=255)
    text = re.sub(r'[\r\n]+', ' ', text)
    text = re.sub(r'\s+', ' ', text)
    return text


def sanitize_description(description: Optional[str]) -> str:
    # HTML is rendered as text by the frontend, so only control chars go
    return sanitize_text(description, max_length=10000)

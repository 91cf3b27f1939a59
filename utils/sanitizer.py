"""
Input Sanitization Module

Cleans free-text user input before it is stored in documents.
Stored text stays raw: escaping belongs to whatever renders it.
"""

import re


_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')

_TRUNCATED = '\n...(truncated)'


def sanitize_text(text, max_length=10000):
    """
    Sanitize text by stripping it and removing control characters.

    Newlines and tabs are kept.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = _CONTROL_CHARS.sub('', text.strip())

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_name(name, max_length=200):
    """
    Sanitize a single-line name (ingredient, menu item, customer).

    Control characters are removed and runs of whitespace collapsed.
    Returns an empty string when nothing is left after cleaning, so
    callers can treat the name as missing.
    """
    if not name:
        return ''

    if not isinstance(name, str):
        name = str(name)

    name = re.sub(r'[\x00-\x1f\x7f-\x9f]', ' ', name)
    name = re.sub(r'\s+', ' ', name).strip()

    if len(name) > max_length:
        name = name[:max_length-3].rstrip() + '...'

    return name


def sanitize_note(note, max_length=2000):
    """
    Sanitize an order note.

    Preserves newlines for formatting. A note that is too long is cut
    and marked as truncated, staying within max_length.

    Args:
        note: The note text (can be None)
        max_length: Maximum allowed length (default 2000)

    Returns:
        Sanitized note, or None when the note is empty
    """
    if not note:
        return None

    if not isinstance(note, str):
        note = str(note)

    note = _CONTROL_CHARS.sub('', note.strip())

    if len(note) > max_length:
        if max_length > len(_TRUNCATED):
            note = note[:max_length - len(_TRUNCATED)] + _TRUNCATED
        else:
            note = note[:max_length]

    return note or None

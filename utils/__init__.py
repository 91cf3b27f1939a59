# Utility modules for Bakery Manager
from .sanitizer import sanitize_text, sanitize_name, sanitize_note
from .numbers import safe_float, safe_int, is_positive

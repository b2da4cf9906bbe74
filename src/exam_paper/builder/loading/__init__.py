"""
Module: builder.loading

Purpose:
    Receive question collections from upstream selection or JSON files.

Key Functions:
    - coerce_questions(): Normalise an upstream collection (None -> empty)
    - load_questions(): Load from JSON
"""

from .loader import coerce_questions, load_questions, LoaderError, MissingInputError

__all__ = [
    "coerce_questions",
    "load_questions",
    "LoaderError",
    "MissingInputError",
]

"""
Module: loading

Purpose:
    Question-definition loading and validation.

Key Functions:
    - load_question(): Load a JSON question definition
    - question_from_dict(): Convert a stored dictionary
    - validate_question(): Basic and schema validation
"""

from .loader import LoaderError, load_question, question_from_dict, question_to_dict
from .validator import ValidationError, validate_question

__all__ = [
    "LoaderError",
    "load_question",
    "question_from_dict",
    "question_to_dict",
    "ValidationError",
    "validate_question",
]

"""Small tools built on the walker: a sanitizer and a size accountant."""

from deepwalk.examples.redact import SENSITIVE_NAMES, redact
from deepwalk.examples.sizeof import SizeReport, deep_sizeof

__all__ = ["SENSITIVE_NAMES", "SizeReport", "deep_sizeof", "redact"]

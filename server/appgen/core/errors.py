# appgen/core/errors.py
"""
Errors raised by the config-generation pipeline.

Only the model invoker and the response normalizer raise; the reconciler and
the fallback producer are total.
"""
from typing import Optional


class AppConfigError(Exception):
    """Base class for pipeline failures."""


class ModelUnavailable(AppConfigError):
    """The generative model call failed or returned no text."""


class MalformedModelOutput(AppConfigError):
    """Text came back but no JSON object could be extracted from it."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class ModificationFailed(AppConfigError):
    """Any other failure while modifying an existing config."""

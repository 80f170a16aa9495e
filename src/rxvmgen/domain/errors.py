"""Exceptions raised by the rendering core.

The core surfaces a single input error kind. Template lookup and rendering
failures come from the template collaborator and get their own type so the
service layer can map them to a distinct error code.
"""

from __future__ import annotations


class RxvmgenError(Exception):
    """Base class for all rxvmgen errors."""


class InvalidInputError(RxvmgenError, ValueError):
    """Declaration text is empty, malformed, or not made of interfaces."""


class TemplateRenderError(RxvmgenError):
    """The ViewModel template could not be loaded or rendered."""

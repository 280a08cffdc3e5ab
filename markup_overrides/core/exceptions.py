class OverrideError(RuntimeError):
    """Raised when an override operation cannot be completed."""


class SelectorError(OverrideError):
    """Raised when a selector cannot be evaluated against a tree."""


class SelectorValidationError(SelectorError):
    """Raised when selector text is unusable before it reaches the matcher."""


class MarkupParseError(OverrideError):
    """Raised when markup cannot be turned into an element tree."""


class ExportError(OverrideError):
    """Raised when an export cannot be assembled or written."""


class ViewportError(ValueError):
    """Raised for custom viewport dimensions outside the supported range."""

class AnalysisError(Exception):
    """Raised when document analysis fails."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class AnalysisRateLimitError(AnalysisNetworkError):
    """Raised when the AI provider rejects the call for rate or quota limits."""


class AnalysisAuthenticationError(AnalysisError):
    """Raised when the AI provider rejects the configured credentials."""

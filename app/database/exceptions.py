class AnalysisStoreError(Exception):
    """Raised when an analysis submission cannot be persisted."""

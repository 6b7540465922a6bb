class ProcessorError(Exception):
    """Base exception for batch-level processing errors."""


class UnknownMergeStrategyError(ProcessorError):
    """Raised when settings name a merge strategy that does not exist."""

"""Exception types raised by ReviewLens."""


class ReviewLensError(Exception):
    """Base class for all ReviewLens errors."""


class InputError(ReviewLensError):
    """The corpus could not be read or contains no usable reviews."""


class CollaboratorError(ReviewLensError):
    """Taxonomy discovery failed or returned malformed data."""

    def __init__(self, message: str, raw_response: str = None):
        super().__init__(message)
        self.raw_response = raw_response


class AnalysisCancelled(ReviewLensError):
    """The caller asked the local pass to stop at a checkpoint."""

    def __init__(self, processed: int, total: int):
        super().__init__(f"Analysis cancelled after {processed}/{total} reviews")
        self.processed = processed
        self.total = total

"""Errors raised by the merge service."""


class MergeError(Exception):
    """Base class for failures that abort a merge call."""


class UpstreamExtractionError(MergeError):
    """The extraction payload is not usable; the store was never touched."""


class CandidateNotFoundError(MergeError):
    def __init__(self, candidate_id):
        super().__init__(f"Candidate {candidate_id} not found")
        self.candidate_id = candidate_id


class MergeTransactionError(MergeError):
    """The unit of work failed and was rolled back."""


class MergeTimeoutError(MergeTransactionError):
    """The unit of work exceeded its wall-clock budget and was rolled back."""

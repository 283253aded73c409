"""
Exceptions raised by the analysis workflow.

The normalizer never raises; these cover upload rejection and
provider failures.
"""

from .models import ValidationOutcome


class AnalysisError(RuntimeError):
    """A screenshot could not be analyzed by the vision provider."""


class UploadRejectedError(AnalysisError):
    """The file failed the upload policy and was not transmitted."""

    def __init__(self, outcome: ValidationOutcome):
        super().__init__(outcome.message or "Upload rejected")
        self.outcome = outcome

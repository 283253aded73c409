"""
Screenshot Analyzer Orchestrator

Coordinates upload validation, the vision provider request and
response normalization to produce an AnalysisResult.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .errors import UploadRejectedError
from .models import AnalysisResult
from .normalizer import normalize
from .providers.base import VisionProvider
from .validation import candidate_for_file, validate_candidate

logger = logging.getLogger(__name__)


class ScreenshotAnalyzer:
    """
    Orchestrates one screenshot analysis at a time.

    Workflow:
    1. Validate the file against the upload policy
    2. Send image and instruction to the vision provider
    3. Normalize the reply into an AnalysisResult

    The most recent result is kept until the next analysis or clear().

    Example:
        config = load_config()
        provider = get_provider("openrouter", config)
        analyzer = ScreenshotAnalyzer(provider)

        result = await analyzer.analyze(Path("screenshot.png"))
        print(result.summary())
    """

    def __init__(self, provider: VisionProvider):
        """
        Initialize screenshot analyzer.

        Args:
            provider: Configured vision provider
        """
        self.provider = provider
        self.last_result: Optional[AnalysisResult] = None
        self._last_request: Optional[tuple[Path, Optional[str]]] = None

    async def analyze(
        self,
        image_path: Union[str, Path],
        prompt: Optional[str] = None
    ) -> AnalysisResult:
        """
        Analyze a screenshot file.

        Any previous result is discarded before the request is made.

        Args:
            image_path: Path to a JPEG, PNG, GIF or WebP file
            prompt: Optional user instruction for the vision model

        Returns:
            Normalized AnalysisResult

        Raises:
            FileNotFoundError: If the file does not exist
            UploadRejectedError: If the file fails the upload policy;
                                 the provider is not called
            AnalysisError: If the provider request fails
        """
        image_path = Path(image_path)
        self.clear()

        candidate = candidate_for_file(image_path)
        outcome = validate_candidate(candidate)
        if not outcome.valid:
            logger.warning("Rejected %s: %s", image_path, outcome.message)
            raise UploadRejectedError(outcome)

        self._last_request = (image_path, prompt)

        reply = await self.provider.analyze(
            image_path,
            prompt=prompt,
            media_type=candidate.media_type
        )
        logger.debug("Received %d characters from %s", len(reply), self.provider.name)

        self.last_result = normalize(reply)
        return self.last_result

    async def rerun(self) -> AnalysisResult:
        """
        Re-issue the most recent analysis request.

        Returns:
            A fresh AnalysisResult, independent of the previous one

        Raises:
            RuntimeError: If nothing has been analyzed yet
        """
        if self._last_request is None:
            raise RuntimeError("No previous analysis to rerun")

        image_path, prompt = self._last_request
        return await self.analyze(image_path, prompt)

    def clear(self) -> None:
        """Discard the current result"""
        self.last_result = None

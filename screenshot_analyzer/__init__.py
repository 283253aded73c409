"""
Screenshot Analyzer - AI UX Feedback Tool

Sends a screenshot to a vision model and normalizes the reply into
UX insights, visual design feedback, best practices and annotations.

Supports multiple vision providers:
- OpenRouter
- OpenAI
- Anthropic Claude
- Local LLMs (Ollama/LLaVA)
"""

__version__ = "0.1.0"

from .models import AnalysisResult, Annotation, UploadCandidate, ValidationOutcome
from .normalizer import normalize
from .validation import validate, validate_file
from .analyzer import ScreenshotAnalyzer

__all__ = [
    "AnalysisResult",
    "Annotation",
    "UploadCandidate",
    "ValidationOutcome",
    "normalize",
    "validate",
    "validate_file",
    "ScreenshotAnalyzer",
]

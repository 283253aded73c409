"""
Data Models for Screenshot Analyzer

Type-safe Pydantic models for all data structures.
The analysis models serialize with the camelCase names the vision
model is asked to answer with, so a stored result can be fed back
through the normalizer unchanged.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UploadCandidate(BaseModel):
    """
    A file that is about to be sent to a vision provider.

    Attributes:
        media_type: Declared MIME type, e.g. "image/png"
        byte_size: Size of the file in bytes
    """

    media_type: str
    byte_size: int


class ValidationOutcome(BaseModel):
    """
    Result of checking an UploadCandidate against the upload policy.

    Only one rejection reason is ever reported; the first failing
    check wins.

    Attributes:
        valid: True when the candidate may be transmitted
        reason: Machine-readable rejection kind (None when valid)
        message: Human-readable rejection message (None when valid)
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    reason: Optional[Literal["unsupported_format", "file_too_large"]] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


class Annotation(BaseModel):
    """
    A rectangular region of interest on the analyzed image.

    Coordinates are in pixels relative to the analyzed image.
    Annotations may overlap and the note may be empty.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float
    text: str = Field(description="Human-readable note for this region")

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g}) {self.width:g}x{self.height:g}: {self.text}"


class AnalysisResult(BaseModel):
    """
    Structured UX feedback produced from one vision model reply.

    This is the main output format consumed by the CLI and by callers.
    Every list is always present (possibly empty).

    Attributes:
        ux_insights: UX and usability observations
        visual_design: Visual design observations
        best_practices: General best-practice recommendations
        annotations: Regions of the image with attached notes
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ux_insights: list[str] = Field(default_factory=list, alias="uxInsights")
    visual_design: list[str] = Field(default_factory=list, alias="visualDesign")
    best_practices: list[str] = Field(default_factory=list, alias="bestPractices")
    annotations: list[Annotation] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if no feedback items were produced"""
        return not (self.ux_insights or self.visual_design or self.best_practices)

    def to_wire(self) -> dict:
        """Dump using the camelCase field names of the JSON reply format"""
        return self.model_dump(by_alias=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize using the camelCase field names of the JSON reply format"""
        return self.model_dump_json(by_alias=True, indent=indent)

    def summary(self) -> str:
        """Generate a short human-readable summary"""
        return (
            f"UX insights: {len(self.ux_insights)}, "
            f"visual design: {len(self.visual_design)}, "
            f"best practices: {len(self.best_practices)}, "
            f"annotations: {len(self.annotations)}"
        )


class Config(BaseModel):
    """
    Configuration for the screenshot analyzer.

    Loaded from .env file and environment variables.

    Attributes:
        openrouter_api_key: OpenRouter API key (optional)
        openrouter_model: Model routed through OpenRouter
        openrouter_base_url: OpenRouter OpenAI-compatible endpoint
        openai_api_key: OpenAI API key (optional)
        openai_model: OpenAI vision model
        anthropic_api_key: Anthropic API key (optional)
        anthropic_model: Claude vision model
        ollama_host: Ollama server URL for local LLMs
        ollama_model: Model name for Ollama (default: llava)
        vision_provider: Which provider to use by default
        max_tokens: Completion token limit per request
        temperature: Sampling temperature per request
        log_level: Root logging level name
    """

    openrouter_api_key: Optional[str] = None
    openrouter_model: str = "meta-llama/llama-2-70b-chat"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llava"
    vision_provider: Literal["openrouter", "openai", "anthropic", "local"] = "openrouter"
    max_tokens: int = Field(default=2000, ge=1)
    temperature: float = Field(default=0.7, ge=0, le=2)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept level names in any case"""
        return v.strip().upper()

    def has_openrouter(self) -> bool:
        """Check if OpenRouter is configured"""
        return self.openrouter_api_key is not None and len(self.openrouter_api_key) > 0

    def has_openai(self) -> bool:
        """Check if OpenAI is configured"""
        return self.openai_api_key is not None and len(self.openai_api_key) > 0

    def has_anthropic(self) -> bool:
        """Check if Anthropic is configured"""
        return self.anthropic_api_key is not None and len(self.anthropic_api_key) > 0

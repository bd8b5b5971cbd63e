from pydantic import BaseModel, ConfigDict, Field

from edusynth.pipeline.note import AudienceLevel


class GenerationRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    topic: str = Field(..., min_length=1, description="Topic to write study notes for.")
    level: AudienceLevel = Field(
        default=AudienceLevel.COLLEGE,
        description="Audience level, one of college/school/exam.",
    )
    credential: str = Field(default="", description="Gemini API key; empty means offline sample.")

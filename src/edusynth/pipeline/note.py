import json
from dataclasses import dataclass
from enum import Enum


class AudienceLevel(str, Enum):
    COLLEGE = "college"
    SCHOOL = "school"
    EXAM = "exam"


NOTE_SECTIONS = ("summary", "explanation", "keyPoints", "conclusion")


@dataclass(frozen=True)
class StudyNote:
    """Structured study note rendered by the demo.

    ``key_points`` keeps presentation order. Notes built from a live response
    always have every field populated; see ``parsing.project_note``.
    """

    summary: str
    explanation: str
    key_points: tuple[str, ...]
    conclusion: str

    def as_dict(self) -> dict:
        return {
            "summary": self.summary,
            "explanation": self.explanation,
            "keyPoints": list(self.key_points),
            "conclusion": self.conclusion,
        }

    def to_json(self) -> str:
        return json.dumps(self.as_dict(), ensure_ascii=False)

    def section_text(self, section: str) -> str:
        if section == "keyPoints":
            return "\n".join(f"- {item}" for item in self.key_points if item)
        if section not in NOTE_SECTIONS:
            raise ValueError(f"unknown note section: {section}")
        return str(self.as_dict()[section])

from edusynth.pipeline.note import AudienceLevel


def build_prompt(topic: str, level: AudienceLevel | str) -> str:
    audience = level.value if isinstance(level, AudienceLevel) else str(level)
    return (
        "You are an academic tutor for students.\n"
        f"Topic: {topic}\n"
        f"Audience: {audience}\n\n"
        "Return ONLY valid JSON with exactly these keys:\n"
        "summary (string)\n"
        "explanation (string)\n"
        "keyPoints (array of strings)\n"
        "conclusion (string)\n\n"
        "Constraints:\n"
        "- Keep summary 3-5 sentences.\n"
        "- Explanation should be simple and structured with short paragraphs.\n"
        "- keyPoints should be 6-10 bullets.\n"
        "- conclusion should be 2-3 sentences.\n"
    )

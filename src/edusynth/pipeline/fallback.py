from edusynth.pipeline.note import AudienceLevel, StudyNote

TONES: dict[AudienceLevel, str] = {
    AudienceLevel.COLLEGE: "Be clear and academic, but not too technical.",
    AudienceLevel.SCHOOL: "Use simple words and a familiar analogy.",
    AudienceLevel.EXAM: "Keep it tight and revision-friendly.",
}


def tone_for(level: AudienceLevel | str) -> str:
    try:
        return TONES[AudienceLevel(level)]
    except ValueError:
        return TONES[AudienceLevel.COLLEGE]


def build_offline_fallback(topic: str, level: AudienceLevel | str) -> StudyNote:
    """Network-free placeholder note.

    Used when no API key is given and whenever a live attempt fails. Only the
    topic and the level's tone phrase vary.
    """
    subject = (topic or "").strip() or "the topic"
    tone = tone_for(level)
    return StudyNote(
        summary=f"{subject} is explained here in a short, structured format to help you revise quickly.",
        explanation=(
            f"This is an offline sample (no API key used). {tone}\n\n"
            f"In practice, EduSynth AI would research {subject}, then rewrite it as easy notes: "
            "what it is, why it matters, and how it works, with key terms defined."
        ),
        key_points=(
            f'Definition: what "{subject}" refers to in a syllabus context',
            "Core idea: the main mechanism or principle",
            "Why it matters: common applications or exam relevance",
            "Common mistakes: typical misconceptions students have",
            "Quick revision: 2-3 lines you can memorize",
        ),
        conclusion=(
            "Use the key points as a checklist. "
            f'If you add a Gemini API key, you can generate real notes for "{subject}" instantly.'
        ),
    )

import logging
from dataclasses import dataclass

from edusynth.config import Settings, get_settings
from edusynth.pipeline.errors import GenerationError
from edusynth.pipeline.fallback import build_offline_fallback
from edusynth.pipeline.note import StudyNote
from edusynth.pipeline.parsing import parse_and_validate
from edusynth.pipeline.prompt import build_prompt
from edusynth.providers.llm.gemini import GeminiClient
from edusynth.schemas import GenerationRequest

logger = logging.getLogger(__name__)

OFFLINE_STATUS = "Done. Generated offline sample notes (add an API key for live output)."
LIVE_STATUS = "Done. Generated live notes."
FALLBACK_SUFFIX = "Showing offline sample instead."


@dataclass
class GenerationOutcome:
    note: StudyNote
    status: str
    live: bool
    error: GenerationError | None = None


class GenerateService:
    def __init__(self, client: GeminiClient | None = None, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.client = client or GeminiClient(self.settings)

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        if not request.credential:
            logger.info("generate.offline topic=%s level=%s", request.topic, request.level.value)
            return GenerationOutcome(
                note=build_offline_fallback(request.topic, request.level),
                status=OFFLINE_STATUS,
                live=False,
            )

        try:
            note = await self.generate_live(request)
        except GenerationError as exc:
            logger.warning(
                "generate.fallback topic=%s type=%s detail=%s",
                request.topic,
                exc.__class__.__name__,
                exc.message,
            )
            return GenerationOutcome(
                note=build_offline_fallback(request.topic, request.level),
                status=f"{exc.message} {FALLBACK_SUFFIX}",
                live=False,
                error=exc,
            )
        except Exception:
            logger.exception("generate.failed topic=%s", request.topic)
            return GenerationOutcome(
                note=build_offline_fallback(request.topic, request.level),
                status=f"Live generation failed. {FALLBACK_SUFFIX}",
                live=False,
            )

        logger.info("generate.live topic=%s key_points=%d", request.topic, len(note.key_points))
        return GenerationOutcome(note=note, status=LIVE_STATUS, live=True)

    async def generate_live(self, request: GenerationRequest) -> StudyNote:
        prompt = build_prompt(request.topic, request.level)
        raw = await self.client.generate_content(prompt, request.credential)
        return parse_and_validate(raw)

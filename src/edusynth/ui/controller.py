import logging
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import ValidationError

from edusynth.pipeline.fallback import build_offline_fallback
from edusynth.pipeline.note import AudienceLevel, StudyNote
from edusynth.schemas import GenerationRequest
from edusynth.service.generator import GenerateService, GenerationOutcome
from edusynth.storage.credentials import CredentialStore
from edusynth.ui.clipboard import copy_text
from edusynth.ui.timer import Stopwatch

logger = logging.getLogger(__name__)

SAMPLE_TOPIC = "Photosynthesis"


@dataclass(frozen=True)
class FormState:
    credential: str
    remember: bool


class DemoController:
    """Form behaviour of the demo page, minus the page.

    Owns the current render (note + status) and the busy flag that keeps a
    second generation from starting while one is awaited.
    """

    def __init__(
        self,
        service: GenerateService,
        store: CredentialStore,
        copier: Callable[[str], bool] = copy_text,
    ) -> None:
        self.service = service
        self.store = store
        self.copier = copier
        self.busy = False
        self.status = ""
        self.note: StudyNote | None = None

    def initial_form(self) -> FormState:
        saved = self.store.load()
        if saved.remember and saved.credential:
            return FormState(credential=saved.credential, remember=True)
        return FormState(credential="", remember=False)

    async def submit(
        self,
        topic: str,
        level: AudienceLevel | str = AudienceLevel.COLLEGE,
        credential: str = "",
        remember: bool = False,
    ) -> GenerationOutcome | None:
        if self.busy:
            self.status = "A generation is already running."
            return None

        try:
            request = GenerationRequest(topic=topic or "", level=level or AudienceLevel.COLLEGE, credential=credential or "")
        except ValidationError as exc:
            if any(error["loc"] == ("topic",) for error in exc.errors()):
                self.status = "Please enter a topic."
                return None
            raise

        self.store.save(request.credential, remember)
        self.status = "Generating with Gemini (live)..." if request.credential else "Generating offline sample..."

        self.busy = True
        stopwatch = Stopwatch()
        stopwatch.start()
        try:
            outcome = await self.service.generate(request)
        finally:
            stopwatch.stop()
            self.busy = False

        logger.info("controller.rendered live=%s elapsed=%s", outcome.live, stopwatch.render())
        self.note = outcome.note
        self.status = outcome.status
        return outcome

    def load_sample(self, topic: str = "", level: AudienceLevel | str = AudienceLevel.COLLEGE) -> StudyNote:
        self.note = build_offline_fallback((topic or "").strip() or SAMPLE_TOPIC, level or AudienceLevel.COLLEGE)
        self.status = "Loaded offline sample output."
        return self.note

    def clear_saved_key(self) -> None:
        self.store.clear()
        self.status = "Saved key cleared."

    def copy_section(self, section: str) -> bool:
        text = self.note.section_text(section) if self.note else ""
        try:
            ok = self.copier(text)
        except Exception:
            logger.exception("controller.copy_failed section=%s", section)
            ok = False
        self.status = "Copied" if ok else "Copy failed"
        return ok

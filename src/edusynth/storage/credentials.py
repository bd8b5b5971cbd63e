import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

API_KEY_ENTRY = "edusynth.gemini_api_key"
REMEMBER_ENTRY = "edusynth.remember_key"


@dataclass(frozen=True)
class SavedCredential:
    credential: str
    remember: bool


class CredentialStore:
    """Best-effort key-value persistence of the API key and the remember flag.

    Values live in a small JSON object on disk. Unreadable or unwritable files
    behave like an empty store; failures are logged at debug level only.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> SavedCredential:
        entries = self._read()
        remember = entries.get(REMEMBER_ENTRY) == "1"
        credential = entries.get(API_KEY_ENTRY) or ""
        return SavedCredential(credential=credential, remember=remember)

    def save(self, credential: str, remember: bool) -> None:
        entries = self._read()
        if remember and credential:
            entries[API_KEY_ENTRY] = credential
            entries[REMEMBER_ENTRY] = "1"
        else:
            entries.pop(API_KEY_ENTRY, None)
            entries[REMEMBER_ENTRY] = "0"
        self._write(entries)

    def clear(self) -> None:
        entries = self._read()
        entries.pop(API_KEY_ENTRY, None)
        entries[REMEMBER_ENTRY] = "0"
        self._write(entries)

    def _read(self) -> dict[str, str]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.debug("credentials.read_failed path=%s type=%s", self.path, exc.__class__.__name__)
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(key): str(value) for key, value in raw.items() if isinstance(value, str)}

    def _write(self, entries: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.debug("credentials.write_failed path=%s type=%s", self.path, exc.__class__.__name__)

import logging
from typing import Optional

from codetutor.services.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

GEMINI_API_KEY_STORAGE = "@gemini_api_key"


class CredentialStore:
    """The learner's Gemini API key, kept in the key-value store."""

    def __init__(self, store: KeyValueStore, key: str = GEMINI_API_KEY_STORAGE):
        self.store = store
        self.key = key

    async def get(self) -> Optional[str]:
        value = await self.store.get_item(self.key)
        return value or None

    async def set(self, value: str) -> bool:
        """Store a key. Returns False when storage fails."""
        value = (value or "").strip()
        if not value:
            raise ValueError("Por favor, insira uma chave de API válida.")
        try:
            await self.store.set_item(self.key, value)
        except StorageError as e:
            logger.error(f"[CREDENTIALS] Error storing API key: {e}")
            return False
        logger.info("[CREDENTIALS] API key saved")
        return True

    async def clear(self) -> bool:
        try:
            await self.store.remove_item(self.key)
        except StorageError as e:
            logger.error(f"[CREDENTIALS] Error removing API key: {e}")
            return False
        logger.info("[CREDENTIALS] API key removed")
        return True

    async def is_configured(self) -> bool:
        return await self.get() is not None

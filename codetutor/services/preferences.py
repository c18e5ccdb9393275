import logging

from codetutor.schemas.preferences import Theme
from codetutor.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

THEME_STORAGE = "theme"
_THEMES = ("light", "dark")


class ThemeContext:
    """
    Light/dark preference passed explicitly to whoever needs it.
    Loaded from and saved to the key-value store.
    """

    def __init__(self, store: KeyValueStore, theme: Theme = "light"):
        self.store = store
        self.theme: Theme = theme

    @classmethod
    async def load(cls, store: KeyValueStore) -> "ThemeContext":
        stored = await store.get_item(THEME_STORAGE)
        return cls(store, stored if stored in _THEMES else "light")

    async def set_theme(self, theme: Theme) -> Theme:
        if theme not in _THEMES:
            raise ValueError(f"Theme must be one of {_THEMES}, got '{theme}'")
        self.theme = theme
        await self.store.set_item(THEME_STORAGE, theme)
        logger.info(f"[PREFERENCES] Theme set to {theme}")
        return theme

    async def toggle(self) -> Theme:
        return await self.set_theme("dark" if self.theme == "light" else "light")

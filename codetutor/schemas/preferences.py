from typing import Literal

from pydantic import BaseModel

Theme = Literal["light", "dark"]


class ThemePreference(BaseModel):
    theme: Theme = "light"

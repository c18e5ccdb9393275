from fastapi import APIRouter, Depends

from codetutor.schemas.preferences import ThemePreference
from codetutor.services.preferences import ThemeContext
from codetutor.services.storage import KeyValueStore, get_store

router = APIRouter(prefix="/preferences")


async def get_theme_context(store: KeyValueStore = Depends(get_store)) -> ThemeContext:
    return await ThemeContext.load(store)


@router.get("/theme", response_model=ThemePreference)
async def read_theme(context: ThemeContext = Depends(get_theme_context)):
    return ThemePreference(theme=context.theme)


@router.put("/theme", response_model=ThemePreference)
async def update_theme(
    request: ThemePreference,
    context: ThemeContext = Depends(get_theme_context),
):
    return ThemePreference(theme=await context.set_theme(request.theme))


@router.post("/theme/toggle", response_model=ThemePreference)
async def toggle_theme(context: ThemeContext = Depends(get_theme_context)):
    return ThemePreference(theme=await context.toggle())

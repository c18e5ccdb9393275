from __future__ import annotations

import re

import pytest

from codetutor.services.onboarding import (
    OnboardingError,
    get_current_user,
    register_user,
    validate_registration,
)


@pytest.mark.parametrize(
    ("name", "email", "field", "message"),
    [
        ("  ", "ana@example.com", "name", "O nome é obrigatório."),
        ("Ana", "", "email", "O email é obrigatório."),
        ("Ana 2", "ana@example.com", "name", "O nome deve conter apenas letras e espaços."),
        ("Ana", "ana@example", "email", "Formato de email inválido."),
        ("Ana", "ana @example.com", "email", "Formato de email inválido."),
        ("Ana", "ana@example.com\n", "email", "Formato de email inválido."),
    ],
)
def test_validation_messages(name, email, field, message) -> None:
    with pytest.raises(OnboardingError) as exc_info:
        validate_registration(name, email)
    assert exc_info.value.field == field
    assert exc_info.value.message == message


def test_accented_names_are_accepted() -> None:
    validate_registration("João Conceição", "joao@example.com.br")


@pytest.mark.asyncio
async def test_register_user_stores_session(store) -> None:
    user = await register_user(store, "Ana", "ana@example.com")

    assert re.fullmatch(r"session-\d{13}", user.session_id)
    assert await store.get_json("userInfo") == {
        "name": "Ana",
        "email": "ana@example.com",
        "sessionId": user.session_id,
    }
    assert await get_current_user(store) == user


@pytest.mark.asyncio
async def test_unreadable_user_info_counts_as_logged_out(store) -> None:
    assert await get_current_user(store) is None

    await store.set_json("userInfo", {"name": "Ana"})
    assert await get_current_user(store) is None

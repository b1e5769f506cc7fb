"""Shared test fixtures."""

import pytest
from fastapi import FastAPI

from tourdesk.api.routes import groups, health, imports, settings


def booking_block(
    phone: str = "+212600000001",
    ref: str = "GYG123ABC",
    email: str | None = "anna@example.com",
    name: str | None = "Anna Smith",
    details: str | None = "🗣 Language: English | 🎟 Participants: 2",
) -> list[str]:
    """Lines of one booking block; pass None to leave a line empty."""
    return [
        f"📞 {phone} | 🔹 Booking Ref: {ref}",
        f"📧 Email: {email}" if email is not None else "",
        f"👤 Name: {name}" if name is not None else "",
        details or "",
    ]


# The sample message operators paste: one group at Bab Agnaou, a second
# pickup at Jemaa el-Fna, 2 + 3 participants and no stated total.
SAMPLE_LINES = [
    "📅 Date: 24/12/25",
    "",
    "13:00",
    "",
    "Group 1    Bab Agnaou",
    "",
    *booking_block(),
    "",
    "   Jemaa el-Fna",
    "",
    *booking_block(
        phone="+212600000002",
        ref="GYG456DEF",
        email="luc@example.fr",
        name="Luc Martin",
        details="🗣 Language: French | 🎟 Participants: 3",
    ),
    "",
]
SAMPLE_TEXT = "\n".join(SAMPLE_LINES)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the back-office mount, for API tests."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(imports.router, prefix="/api")
    app.include_router(groups.router, prefix="/api")
    app.include_router(settings.router, prefix="/api")
    return app

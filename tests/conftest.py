from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from copyworx.api import create_app
from copyworx.config.dependencies import Dependencies
from copyworx.config.settings import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "gemini_api_key": "test-key",
        "supabase_url": None,
        "supabase_service_key": None,
        "retry_delay": 0,
        "log_json": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def reply(llm: MagicMock, text: str) -> None:
    """Make the fake model answer every call with ``text``."""
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=text))


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def llm() -> MagicMock:
    model = MagicMock()
    reply(model, "{}")
    return model


@pytest.fixture
def llm_factory(llm) -> MagicMock:
    return MagicMock(return_value=llm)


@pytest.fixture
def supabase() -> MagicMock:
    manager = MagicMock()
    manager.execute_with_retry = AsyncMock(return_value=[])
    return manager


@pytest.fixture
def dependencies(settings, llm_factory, supabase) -> Dependencies:
    return Dependencies(
        settings=settings,
        llm_factory=llm_factory,
        supabase_factory=MagicMock(return_value=supabase),
    )


@pytest.fixture
def client(dependencies) -> TestClient:
    return TestClient(create_app(dependencies))


@pytest.fixture
def brand_voice() -> dict:
    return {
        "brandName": "Acme",
        "brandTone": "playful",
        "approvedPhrases": [],
        "forbiddenWords": ["buy now"],
        "brandValues": [],
        "missionStatement": "",
    }


@pytest.fixture
def persona() -> dict:
    return {
        "name": "Busy Parent",
        "demographics": "35-45, suburban",
        "psychographics": "Values convenience",
        "painPoints": "No time to cook",
        "languagePatterns": "Plain, direct",
        "goals": "Healthy dinners in 20 minutes",
    }

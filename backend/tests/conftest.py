"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("OPENROUTER_API_KEY", "test-openrouter-key")
os.environ.setdefault("COOKIE_SECURE", "false")

from collections.abc import Generator, Mapping, Sequence  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from flashgen import models  # noqa: E402
from flashgen.application.generation.protocols import (  # noqa: E402
    ChatCompletion,
    ChatMessage,
    JsonSchemaFormat,
)
from flashgen.config import get_settings  # noqa: E402
from flashgen.core import container  # noqa: E402
from flashgen.database import Base, build_engine, build_session_factory, get_db  # noqa: E402
from flashgen.domain.common.value_objects import ContentHash  # noqa: E402
from flashgen.infrastructure.identity.services.password_service import (  # noqa: E402
    PasswordService,
)
from flashgen.infrastructure.identity.services.token_service import TokenService  # noqa: E402
from flashgen.main import app  # noqa: E402

TEST_PASSWORD = "correct-horse"  # noqa: S105

# In-memory SQLite shared across threads through a StaticPool
test_engine = build_engine("sqlite:///:memory:")
TestSessionLocal = build_session_factory(test_engine)


def make_source_text(length: int = 1500) -> str:
    """Build a source text of exactly `length` characters."""
    sentence = "Photosynthesis turns light into chemical energy. "
    return (sentence * (length // len(sentence) + 1))[:length]


class FakeLLMGateway:
    """
    Stand-in for OpenRouterClient.

    Each call pops the next scripted reply; an exception instance is raised
    instead of returned. Calls are recorded for assertions.
    """

    def __init__(self, *replies: Any) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    async def chat_completion(
        self,
        messages: Sequence[ChatMessage],
        *,
        model_name: str | None = None,
        params: Mapping[str, Any] | None = None,
        response_format: JsonSchemaFormat | None = None,
    ) -> ChatCompletion:
        self.calls.append(
            {
                "messages": list(messages),
                "model_name": model_name,
                "response_format": response_format,
            }
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return ChatCompletion(data=reply)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def anonymous_client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Test client without credentials."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _create_user(db_session: Session, email: str) -> models.User:
    hashed_password = PasswordService().hash_password(TEST_PASSWORD)
    user = models.User(email=email, hashed_password=hashed_password)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def auth_headers(user: models.User) -> dict[str, str]:
    settings = get_settings()
    token = TokenService(settings.SECRET_KEY, settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return {"Authorization": f"Bearer {token.create_access_token(user.id).access_token}"}


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    return _create_user(db_session, "learner@example.com")


@pytest.fixture
def other_user(db_session: Session) -> models.User:
    return _create_user(db_session, "someone.else@example.com")


@pytest.fixture
def client(anonymous_client: TestClient, test_user: models.User) -> TestClient:
    """Test client signed in as test_user."""
    anonymous_client.headers.update(auth_headers(test_user))
    return anonymous_client


def create_generation(db_session: Session, user: models.User) -> models.Generation:
    source_text = make_source_text()
    generation = models.Generation(
        user_id=user.id,
        model="openai/gpt-4o-mini",
        source_text_hash=ContentHash.compute(source_text).value,
        source_text_length=len(source_text),
        generated_count=3,
        generation_duration=1200,
    )
    db_session.add(generation)
    db_session.commit()
    db_session.refresh(generation)
    return generation


@pytest.fixture
def test_generation(db_session: Session, test_user: models.User) -> models.Generation:
    return create_generation(db_session, test_user)


@pytest.fixture
def foreign_generation(db_session: Session, other_user: models.User) -> models.Generation:
    return create_generation(db_session, other_user)


@pytest.fixture
def fake_gateway() -> Generator[FakeLLMGateway, None, None]:
    """Replace the OpenRouter client in the container; script replies via `replies`."""
    gateway = FakeLLMGateway()
    with container.llm_gateway.override(providers.Object(gateway)):
        yield gateway

"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time, so configure the test database first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from adaptiq import models  # noqa: F401
from adaptiq.database import Base
from adaptiq.main import app
from adaptiq.schemas.accessibility import AccessibilitySettings
from adaptiq.schemas.adaptation import ContentStep, LessonContent
from adaptiq.schemas.learner import LearnerProfile
from adaptiq.services.adaptation_engine import AdaptationEngine

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db() -> AsyncGenerator[AsyncSession, None]:
    """Create an isolated test database session."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create test client; each client starts with an empty database."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def engine() -> AdaptationEngine:
    return AdaptationEngine()


@pytest.fixture
def default_settings() -> AccessibilitySettings:
    return AccessibilitySettings()


@pytest.fixture
def plain_profile() -> LearnerProfile:
    """A learner with no declared support needs."""
    return LearnerProfile(id="learner-1")


@pytest.fixture
def sample_lesson() -> LessonContent:
    """Three-step lesson with wordy instructions."""
    return LessonContent(
        id="lesson-1",
        title="Counting to ten",
        instructions="We will utilize blocks to demonstrate counting.",
        description="Learners acquire counting skills approximately one number at a time.",
        steps=[
            ContentStep(content="Pick up one block"),
            ContentStep(content="Add another block"),
            ContentStep(content="Count all the blocks"),
        ],
        subject="math",
    )


@pytest.fixture
def sample_profile_data():
    """Profile payload for the API."""
    return {
        "disability_types": ["dyslexia", "adhd"],
        "learning_preferences": {
            "visual_learner": True,
            "preferred_pace": "slow",
            "attention_span": "short",
            "processing_speed": "normal",
        },
        "cognitive_profile": {
            "working_memory_capacity": "medium",
        },
        "performance_history": {
            "average_accuracy": 0.5,
            "average_completion_time": 120.0,
            "struggling_concepts": ["fractions", "division", "time", "money"],
            "mastered_concepts": ["counting"],
        },
    }

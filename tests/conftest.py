"""Root conftest — shared fixtures for engine tests."""

import os

import pytest

# Keep test output quiet regardless of the developer's .env
os.environ.setdefault("DISABLE_DECOMPOSITION_LOGGING", "true")
os.environ.setdefault("LOG_FORMAT", "text")

from decomposition_engine.core.decomposition_state import DecompositionState  # noqa: E402
from decomposition_engine.core.entity_store import EntityStore  # noqa: E402
from decomposition_engine.services.decomposition_dispatch import DecompositionDispatch  # noqa: E402


class FakeClock:
    """Monotonic millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def tick(self, ms: int = 1) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return EntityStore(clock=clock)


@pytest.fixture
def dispatch(store):
    return DecompositionDispatch(DecompositionState(store=store), log_summaries=False)


@pytest.fixture
def seeded(dispatch):
    """p1 with c1 (no deps) and c2 depending on c1."""
    dispatch.execute("createProblem", {
        "problemData": {"problemId": "p1", "problemStatement": "Build a compiler"},
    })
    dispatch.execute("createComponent", {
        "componentData": {
            "componentId": "c1", "parentProblemId": "p1",
            "name": "Lexer", "description": "Tokenizes source",
        },
    })
    dispatch.execute("createComponent", {
        "componentData": {
            "componentId": "c2", "parentProblemId": "p1",
            "name": "Parser", "description": "Builds the AST",
            "dependencies": ["c1"],
        },
    })
    return dispatch

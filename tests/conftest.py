"""Pytest configuration and global fixtures for ragcore tests."""

from pathlib import Path

import pytest

from ragcore.embedder.providers.hash import HashEmbedder
from tests.helpers import StubLLM


# ==================== Fixtures ====================

@pytest.fixture
def hash_embedder():
    return HashEmbedder(dimension=128)


@pytest.fixture
def stub_llm():
    return StubLLM()


@pytest.fixture
def corpus_dir(tmp_path) -> Path:
    """A small corpus with one file per supported text format plus noise."""
    docs = tmp_path / "documents"
    docs.mkdir()
    (docs / "admissions.md").write_text(
        "# Admissions\n\n"
        "Admissions run in rolling rounds. Each round includes an application review, "
        "an entrance test and a personal interview with the admissions committee.\n\n"
        "Early applicants receive decisions sooner and can apply for merit scholarships.",
        encoding="utf-8",
    )
    (docs / "campus.txt").write_text(
        "The campus is located in Gurugram. It has modern classrooms, technology labs, "
        "a library and recreational facilities for students living on campus.",
        encoding="utf-8",
    )
    (docs / "notes.csv").write_text("a,b,c\n1,2,3\n", encoding="utf-8")
    return docs


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    for item in items:
        rel_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in rel_path.parts:
            item.add_marker(pytest.mark.integration)

"""Shared fixtures for learning graph tests."""

import pytest


def _row(
    name: str,
    module: str,
    area: str = "Math",
    prereqs: str = "",
    tags: str = "",
    difficulty: str = "Beginner",
    tag_prereqs: str = "",
    link: str = "",
    type: str = "Article",
) -> dict[str, str]:
    return {
        "Resource Name": name,
        "Link": link or f"https://example.com/{name.lower().replace(' ', '-')}",
        "Area": area,
        "Module": module,
        "Tags": tags,
        "Type": type,
        "Difficulty": difficulty,
        "Prerequisite module(s)": prereqs,
        "Tag Prerequisites": tag_prereqs,
    }


@pytest.fixture
def make_row():
    """Factory for catalog rows with sensible defaults."""
    return _row


@pytest.fixture
def sample_rows():
    """Small catalog: Algebra -> Calculus -> Analysis, plus a Physics module."""
    return [
        _row("Intro to Algebra", "Algebra", tags="Math>Algebra>Linear", difficulty="Beginner"),
        _row("Matrices", "Algebra", tags="Math>Algebra>Linear|Math>Matrices", difficulty="Intermediate"),
        _row("Limits", "Calculus", prereqs="Algebra", tags="Math>Calculus", difficulty="Intermediate"),
        _row("Derivatives", "Calculus", prereqs="Algebra", tags="Math>Calculus>Derivatives", difficulty="Advanced"),
        _row("Real Analysis", "Analysis", prereqs="Calculus", tags="Math>Analysis", difficulty="Advanced"),
        _row("Kinematics", "Mechanics", area="Physics", prereqs="Calculus | Algebra",
             tags="Physics>Mechanics", tag_prereqs="Math>Calculus", difficulty="Intermediate"),
    ]


CSV_TEXT = """Resource Name,Link,Area,Module,Tags,Type,Difficulty,Prerequisite module(s),Tag Prerequisites
Intro to Algebra,https://example.com/algebra,Math,Algebra,Math>Algebra,Video,Beginner,,
Limits,https://example.com/limits,Math,Calculus,Math>Calculus,Article,Intermediate,Algebra,Math>Algebra
"""


@pytest.fixture
def csv_text():
    return CSV_TEXT

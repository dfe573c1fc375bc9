import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

project_root = Path(__file__).resolve().parents[1]
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


def _role(index: int, bullets: int = 5) -> Dict[str, Any]:
    return {
        "role": f"Engineer {index}",
        "company": f"Company {index}",
        "dates": f"20{10 + index} - 20{11 + index}",
        "description": [
            f"Delivered project {index}.{b} across several teams and improved reliability for every client."
            for b in range(bullets)
        ],
    }


@pytest.fixture
def make_resume() -> Callable[..., Dict[str, Any]]:
    """Build a resume dict in the client's camelCase shape."""
    def _make(
        roles: int = 3,
        bullets: int = 5,
        certifications: List[str] | None = None,
        summary: str = "Platform engineer focused on reliable, well-tested distributed systems.",
        skills: int = 12,
    ) -> Dict[str, Any]:
        resume = {
            "fullName": "Jordan Rivera",
            "title": "Senior Software Engineer",
            "contact": {"email": "jordan@example.com", "location": "Denver, CO"},
            "summary": summary,
            "skills": [f"Skill {i}" for i in range(skills)],
            "experience": [_role(i, bullets) for i in range(roles)],
            "education": [{"degree": "BS Computer Science", "school": "State University"}],
            "awards": ["Engineer of the Year"],
        }
        if certifications is not None:
            resume["certifications"] = certifications
        return resume

    return _make


@pytest.fixture
def sample_resume(make_resume) -> Dict[str, Any]:
    return make_resume()

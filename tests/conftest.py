import json
from pathlib import Path

import pytest

from stache import parse, render


def write(p: Path, text: str) -> Path:
    """Writes a file, creating parent directories."""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def jload(s: str):
    return json.loads(s)


@pytest.fixture
def render_text():
    """parse + render in one step."""
    def _render(source, env=None):
        return render(parse(source), env)
    return _render

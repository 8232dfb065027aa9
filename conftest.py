from __future__ import annotations

# conftest en la raíz: pytest añade este directorio a sys.path y así los
# paquetes `cinelaunch` y `frontend` (sin __init__.py) se importan en los tests.

import pytest

from cinelaunch.models import Entry


@pytest.fixture
def make_entry():
    """Factoría de entradas con valores por defecto razonables."""
    counter = {"n": 0}

    def _make(**overrides: object) -> Entry:
        counter["n"] += 1
        n = counter["n"]
        fields: dict[str, object] = {
            "id": f"id-{n}",
            "title": f"Title {n}",
            "external_link": f"https://example.com/watch/{n}",
            "image_link": "",
            "description": "",
            "language": "English",
            "genre": "Action",
            "created_at": 1_700_000_000_000 + n,
        }
        fields.update(overrides)
        return Entry(**fields)  # type: ignore[arg-type]

    return _make

import logging
from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


def _stanza(body: str, root: str = "crack_params") -> str:
    return f"<params><{root}>{body}</{root}></params>"


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def stanza():
    """Wrap a body in a parameter stanza inside an outer element."""
    return _stanza


@pytest.fixture()
def example_xml() -> Path:
    return EXAMPLES_DIR / "crack_md.xml"


@pytest.fixture()
def write_xml(tmp_path: Path):
    def _write(text: str, name: str = "params.xml") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write

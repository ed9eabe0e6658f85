import logging
import tempfile
from pathlib import Path
from typing import Callable, Dict

import pytest

from cadence_resolver.loader import MemoryLoader

TEST_DIR = Path(__file__).resolve().parent

LOGGER = logging.getLogger(__name__)


@pytest.fixture
def make_tmpdir():
    with tempfile.TemporaryDirectory() as tmpdirname:
        yield tmpdirname


@pytest.fixture
def contracts_dir() -> Path:
    return TEST_DIR / "contracts"


@pytest.fixture
def memory_loader() -> Callable[[Dict[str, str]], MemoryLoader]:
    def _loader(sources: Dict[str, str]) -> MemoryLoader:
        LOGGER.debug("Serving %s", list(sources))
        return MemoryLoader(sources)

    return _loader

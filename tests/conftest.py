import io
import os
import struct
import tempfile
import zlib

# Keep profile directories and log files out of the checkout.
os.environ.setdefault("RECIPER_DATA_DIR", tempfile.mkdtemp(prefix="reciper-tests-"))

import pytest
from loguru import logger
from PIL import Image

import reciper.logger as reciper_logger
from reciper.book import RecipeBook
from reciper.models import Recipe
from reciper.profile import Profile
from reciper.runtime import RuntimeContext, set_runtime_context
from reciper.storage import MemoryKeyValueStore
from reciper.store import RecipeStore


@pytest.fixture(autouse=True)
def _no_logging_sinks(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(reciper_logger, "_logger_configured", True)


@pytest.fixture
def log_messages():
    messages: list[str] = []
    sink_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(sink_id)


@pytest.fixture
def namespace() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store(namespace: MemoryKeyValueStore) -> RecipeStore:
    return RecipeStore(namespace)


@pytest.fixture
def book(store: RecipeStore) -> RecipeBook:
    return RecipeBook.open(store)


@pytest.fixture
def profile(tmp_path) -> Profile:
    return Profile(name="test", data_root=tmp_path / "data")


@pytest.fixture
def runtime(profile: Profile, namespace: MemoryKeyValueStore):
    context = RuntimeContext(profile=profile, namespace=namespace)
    set_runtime_context(context)
    yield context
    set_runtime_context(None)


def make_png(size: tuple[int, int] = (32, 24), color=(200, 30, 30, 128)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGBA", size, color).save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def pasta() -> Recipe:
    return Recipe.create("Pasta", ["Pasta", "Tomato sauce", "Cheese"], "Cook pasta, add sauce", "Italian")


@pytest.fixture
def salad() -> Recipe:
    return Recipe.create("Salad", ["Lettuce", "Pasta-flavored dressing"], "Toss", "Healthy")


def make_oversized_png(width: int = 30000, height: int = 30000) -> bytes:
    """A PNG header declaring more pixels than Pillow will open."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IEND", b"")

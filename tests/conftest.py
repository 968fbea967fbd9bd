"""
Pytest fixtures and test configuration
"""
import pytest
import io
import os
import sys
from unittest.mock import AsyncMock, MagicMock

from PIL import Image

# Set testing environment variables BEFORE importing app modules
os.environ['TESTING'] = 'true'
os.environ['INGEST_ON_STARTUP'] = 'false'

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.catalog import Catalog, CatalogEntry, MediaKind
from database import KeyValueStore
from repositories.published_emotes import PublishedEmoteIndex


@pytest.fixture
def test_db_path(tmp_path):
    """Path to test database file."""
    return str(tmp_path / 'test_emotes.db')


@pytest.fixture
def store(test_db_path):
    kv = KeyValueStore(test_db_path)
    yield kv
    kv.close()


@pytest.fixture
def published(store):
    return PublishedEmoteIndex(store)


def make_entry(index=0, name=None, guild_name='Test Guild', animated=False, safe=True, url=None):
    """Helper to build a catalog entry with predictable fields."""
    emote_id = str(100000 + index)
    return CatalogEntry(
        ref=f"emote#{index}",
        id=emote_id,
        name=name if name is not None else f"emote{index}",
        requires_colons=True,
        media_kind=MediaKind.ANIMATED if animated else MediaKind.STATIC,
        url=url or f"https://cdn.example.com/emojis/{emote_id}.{'gif' if animated else 'png'}",
        safe=safe,
        guild_id='42',
        guild_name=guild_name,
    )


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def sample_registry():
    """Decoded registry document with one static, one animated and one unsafe emote."""
    return {
        'version': 1,
        'list': [
            {
                'ref': 'Kappa', 'id': '1', 'name': 'Kappa', 'requires_colons': True,
                'animated': False, 'url': 'https://cdn.example.com/emojis/1.png',
                'safe': True, 'guild_id': '10', 'guild_name': 'Twitch Classics',
            },
            {
                'ref': 'PartyParrot', 'id': '2', 'name': 'PartyParrot', 'requires_colons': True,
                'animated': True, 'url': 'https://cdn.example.com/emojis/2.gif',
                'safe': True, 'guild_id': '10', 'guild_name': 'Twitch Classics',
            },
            {
                'ref': 'Nope', 'id': '3', 'name': 'Nope', 'requires_colons': False,
                'animated': False, 'url': 'https://cdn.example.com/emojis/3.png',
                'safe': False, 'guild_id': '11', 'guild_name': 'Elsewhere',
            },
        ],
    }


def make_png(size=(64, 32), color=(255, 0, 0, 255)):
    """Encode a solid RGBA PNG in memory."""
    buffer = io.BytesIO()
    Image.new('RGBA', size, color=color).save(buffer, 'PNG')
    return buffer.getvalue()


@pytest.fixture
def png_factory():
    return make_png


def make_response(content=b'', content_type='image/png', status_code=200, reason='OK'):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.headers = {'Content-Type': content_type} if content_type else {}
    response.content = content
    return response


@pytest.fixture
def mock_session():
    """requests.Session stand-in; set .get.return_value / side_effect per test."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def mock_platform():
    """PlatformClient stand-in handing out sequential file ids."""
    platform = MagicMock()
    counter = {'n': 0}

    async def upload(chat_id, data, caption):
        counter['n'] += 1
        return f"file-{counter['n']}"

    platform.send_image = AsyncMock(side_effect=upload)
    platform.send_animation = AsyncMock(side_effect=upload)
    platform.answer_search = AsyncMock()
    return platform


def build_catalog(*entries):
    return Catalog(entries=tuple(entries))

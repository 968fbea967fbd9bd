"""
Tests for published emote records (repositories/published_emotes.py)
"""
from database import KeyValueStore
from repositories.published_emotes import PublishedEmoteIndex, published_key


class TestPublishedEmoteIndex:
    def test_unknown_emote(self, published):
        assert not published.is_published('123')
        assert published.lookup('123') is None

    def test_record_then_lookup(self, published):
        published.record_published('123', 'AgACAgIAAxkBAAIB')

        assert published.is_published('123')
        assert published.lookup('123') == 'AgACAgIAAxkBAAIB'

    def test_key_layout(self, store, published):
        published.record_published('123', 'file-1')
        assert store.get(published_key('123')) == b'file-1'
        assert published_key('123') == 'emote_uploaded_file_id:123'

    def test_survives_restart(self, test_db_path):
        PublishedEmoteIndex(KeyValueStore(test_db_path)).record_published('7', 'file-7')

        reopened = PublishedEmoteIndex(KeyValueStore(test_db_path))
        assert reopened.is_published('7')
        assert reopened.lookup('7') == 'file-7'

    def test_count_published(self, published):
        published.record_published('1', 'a')
        published.record_published('3', 'c')
        assert published.count_published(['1', '2', '3', '4']) == 2

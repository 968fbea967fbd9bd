"""
EmoteBridge Test Suite

Test organization:
- test_kv_store.py: SQLite key-value store
- test_catalog.py: Registry parsing
- test_rate_limiter.py, test_download_cache.py, test_image_transformer.py,
  test_magick_transformer.py: Processing building blocks
- test_published_emotes.py, test_search_service.py, test_ingestion_service.py:
  Publishing and search pipelines
- test_telegram_client.py, test_api_routes.py, test_decorators.py: Entry points
- conftest.py: Shared fixtures and test utilities
"""

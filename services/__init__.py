"""
Services package for EmoteBridge.

- ingestion_service: download -> render -> upload -> record pipeline
- search_service: inline query search and page tokens
- telegram_client: Telegram Bot API calls
- processing: download cache, image rendering, rate limiting

Service modules should be imported directly
(e.g. ``from services.search_service import SearchIndex``).
"""

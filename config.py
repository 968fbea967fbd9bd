"""
Centralized configuration for all modules
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Application name (used as logger root and User-Agent prefix)
APP_NAME = os.environ.get('APP_NAME', 'EmoteBridge')

# ==================== PATHS ====================

# Emote registry document ({"version": 1, "list": [...]})
REGISTRY_PATH = os.environ.get('REGISTRY_PATH', './emote-registry.json')

# Key-value store
DATABASE_PATH = os.environ.get('DATABASE_PATH', './data/emotes.db')

# ==================== TELEGRAM ====================

TELEGRAM_BOT_TOKEN = os.environ.get('TELEGRAM_BOT_TOKEN', '')

# Chat the bot uploads processed emotes to in order to obtain file ids
STORAGE_CHAT_ID = os.environ.get('STORAGE_CHAT_ID', '')

# When set, updates are received by webhook instead of long polling
WEBHOOK_URL = os.environ.get('WEBHOOK_URL', '')

# Seconds to wait on a 429 that carries no retry_after hint
RATE_LIMIT_DEFAULT_TIMEOUT = float(os.environ.get('RATE_LIMIT_DEFAULT_TIMEOUT', 5))

# ==================== DOWNLOADS ====================

# None = no client-side timeout, only what the CDN itself enforces
DOWNLOAD_TIMEOUT = float(os.environ['DOWNLOAD_TIMEOUT']) if os.environ.get('DOWNLOAD_TIMEOUT') else None
DOWNLOAD_USER_AGENT = os.environ.get('DOWNLOAD_USER_AGENT', f'{APP_NAME}/1.0')

# ==================== IMAGE PROCESSING ====================

# Content area and border of the published canvas (total = size + 2 * border)
EMOTE_CANVAS_SIZE = 128
EMOTE_CANVAS_BORDER = 16

# 'pillow' (in-process) or 'magick' (ImageMagick subprocess)
IMAGE_TRANSFORM_BACKEND = os.environ.get('IMAGE_TRANSFORM_BACKEND', 'pillow').lower()
MAGICK_BINARY = os.environ.get('MAGICK_BINARY', 'magick')

# ==================== INGESTION ====================

# Run the ingestion pipeline as a background task when the app starts
INGEST_ON_STARTUP = os.environ.get('INGEST_ON_STARTUP', 'true').lower() in ('true', '1', 'yes')

# ==================== SEARCH ====================

INLINE_QUERY_PAGE_SIZE = 50
INLINE_QUERY_PAGE_NUMBER_BASE = 36  # maximum supported by int()

# ==================== DATABASE PERFORMANCE ====================

# SQLite cache size in MB (default: 64MB)
DB_CACHE_SIZE_MB = int(os.environ.get('DB_CACHE_SIZE_MB', 64))

# Memory-mapped I/O size in MB (default: 256MB)
DB_MMAP_SIZE_MB = int(os.environ.get('DB_MMAP_SIZE_MB', 256))

# WAL autocheckpoint interval in pages (default: 1000)
DB_WAL_AUTOCHECKPOINT = int(os.environ.get('DB_WAL_AUTOCHECKPOINT', 1000))

# ==================== LOGGING ====================

# Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_FILE = os.environ.get('LOG_FILE') or None

# ==================== WEB APP ====================

HOST = os.environ.get('HOST', '0.0.0.0')
PORT = int(os.environ.get('PORT', 5000))

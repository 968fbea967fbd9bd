"""
Exception hierarchy shared by the ingestion and search pipelines.

Only Telegram throttling (telegram.error.RetryAfter) is recovered locally, by
services.processing.rate_limiter. Everything here is fatal to the unit of
work that raised it.
"""


class EmoteBridgeError(Exception):
    """Base exception for EmoteBridge errors"""
    pass


class RegistryVersionError(EmoteBridgeError):
    """Emote registry document has a version this build cannot read"""

    def __init__(self, version):
        super().__init__(f"Unsupported emote registry version: {version!r}")
        self.version = version


class DownloadError(EmoteBridgeError):
    """Origin server answered with a non-2xx status"""

    def __init__(self, url: str, status_code: int, reason: str):
        super().__init__(f"GET {url} failed: {status_code} {reason}")
        self.url = url
        self.status_code = status_code
        self.reason = reason


class UnsupportedMediaTypeError(EmoteBridgeError):
    """Content type is unknown, or known but not implemented by the transformer"""

    def __init__(self, media_type: str, detail: str = "unsupported media type"):
        super().__init__(f"{detail}: {media_type}")
        self.media_type = media_type


class KeyNotFoundError(KeyError):
    """Requested key is absent from the key-value store"""
    pass

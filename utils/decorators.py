"""
Decorators for API endpoints and service functions.

This module provides decorators for consistent error handling
and async/sync function wrapping.
"""

from functools import wraps
from quart import jsonify
from typing import Callable, Any
import asyncio

from core.errors import EmoteBridgeError, KeyNotFoundError
from utils.logging_config import get_logger

logger = get_logger('API')


def api_handler(log_errors: bool = True):
    """
    Decorator for API endpoints that handles:
    - Exception catching with proper logging
    - Consistent response format

    Args:
        log_errors: If True, logs a traceback on server errors

    Usage:
        @api_blueprint.route('/endpoint')
        @api_handler()
        async def my_endpoint():
            # Just the logic, no try/except needed
            return {"data": "value"}  # Auto-wrapped with success=True
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                result = await func(*args, **kwargs)

                # Auto-wrap dict responses
                if isinstance(result, dict):
                    if 'success' not in result:
                        result = {"success": True, **result}
                    return jsonify(result)

                return result

            except ValueError as e:
                return jsonify({"success": False, "error": str(e)}), 400
            except KeyNotFoundError as e:
                return jsonify({"success": False, "error": f"Not found: {e.args[0]}"}), 404
            except EmoteBridgeError as e:
                if log_errors:
                    logger.exception(f"{func.__name__} failed")
                return jsonify({"success": False, "error": str(e)}), 502
            except Exception as e:
                if log_errors:
                    logger.exception(f"{func.__name__} failed")
                return jsonify({"success": False, "error": str(e)}), 500

        return wrapper
    return decorator


def sync_to_async(func: Callable) -> Callable:
    """
    Decorator to run synchronous functions in a thread pool.
    Useful for wrapping sync service functions for async routes.

    Usage:
        @sync_to_async
        def my_sync_function():
            # sync code
            return result
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        return await asyncio.to_thread(func, *args, **kwargs)
    return wrapper

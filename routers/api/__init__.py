from quart import Blueprint, current_app

from core.context import EXTENSION_KEY

api_blueprint = Blueprint('api', __name__)


def get_bridge():
    """The BridgeContext of the running app."""
    return current_app.extensions[EXTENSION_KEY]


# Import sub-modules to register routes
from . import (
    status,
    search,
)

from quart import request

from . import api_blueprint, get_bridge
from utils import api_handler, sync_to_async


@api_blueprint.route('/search')
@api_handler()
async def search():
    """JSON view of one inline-query page, for debugging search without Telegram."""
    query = request.args.get('q', '')
    offset = request.args.get('offset', '')
    page = await sync_to_async(get_bridge().search_index.search)(query, offset)
    return {
        "page": page.page_number,
        "next_offset": page.next_page_token,
        "results": [
            {
                "id": result.id,
                "title": result.title,
                "media_kind": result.media_kind.value,
                "media_reference": result.media_reference,
            }
            for result in page.results
        ],
    }

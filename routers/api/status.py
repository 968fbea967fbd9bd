from . import api_blueprint, get_bridge
from utils import api_handler, sync_to_async


@sync_to_async
def _count_published(bridge):
    return bridge.published.count_published(entry.id for entry in bridge.catalog.eligible())


@api_blueprint.route('/status')
@api_handler()
async def status():
    """Registry size and ingestion progress."""
    bridge = get_bridge()
    ingestion = bridge.pipeline.status
    return {
        "catalog_size": len(bridge.catalog),
        "eligible": sum(1 for _ in bridge.catalog.eligible()),
        "published": await _count_published(bridge),
        "ingestion": {
            "running": ingestion.running,
            "current_ref": ingestion.current_ref,
            "published": ingestion.report.published,
            "skipped": ingestion.report.skipped,
            "failed_ref": ingestion.report.failed_ref,
            "failed_stage": ingestion.report.failed_stage,
            "error": ingestion.error,
        },
    }

"""Feed, title lookup and search endpoints."""
import azure.functions as func
import logging
import json
from typing import Optional

from vibefeed_recommendation_service.config import get_catalog_path
from vibefeed_recommendation_service.models import InteractionEvent, UserTasteProfile
from vibefeed_recommendation_service.repos import CatalogRepository
from vibefeed_recommendation_service.services import FeedService

# Initialize blueprint
bp = func.Blueprint()

logger = logging.getLogger(__name__)

# Loaded on first request (singleton pattern)
_feed_service: Optional[FeedService] = None


def get_feed_service() -> FeedService:
    """Get the process-wide feed service, loading the catalog on first use."""
    global _feed_service
    if _feed_service is None:
        catalog = CatalogRepository.from_file(get_catalog_path())
        _feed_service = FeedService(catalog)
    return _feed_service


def _json_response(body: dict, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body),
        status_code=status_code,
        mimetype="application/json"
    )


@bp.route(route="recs/feed", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def get_feed(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get one page of the recommendation feed.

    Query Parameters:
        - cursor: Cursor returned by the previous page (default: first page)

    Body:
        - profile: User taste profile (missing fields get defaults)
        - interactions: Interaction history (default: [])
        - watchlist: Saved title ids (default: [])
    """
    try:
        try:
            body = req.get_json()
        except ValueError:
            return _json_response({"error": "Request body must be valid JSON"}, 400)

        if not isinstance(body, dict):
            return _json_response({"error": "Request body must be a JSON object"}, 400)

        try:
            profile = UserTasteProfile.from_dict(body.get("profile"))
            interactions = [InteractionEvent.from_dict(i) for i in body.get("interactions") or []]
            for event in interactions:
                event.parsed_timestamp()
            watchlist = [str(title_id) for title_id in body.get("watchlist") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            return _json_response({"error": f"Invalid feed request: {e}"}, 400)

        response = get_feed_service().fetch_feed(
            profile=profile,
            interactions=interactions,
            watchlist=watchlist,
            cursor=req.params.get('cursor')
        )

        return _json_response(response.to_dict())

    except Exception as e:
        logger.error(f"Error building feed: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


@bp.route(route="titles/{title_id}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_title(req: func.HttpRequest) -> func.HttpResponse:
    """Get a catalog title by id."""
    try:
        title_id = req.route_params.get('title_id')

        if not title_id:
            return _json_response({"error": "title_id is required"}, 400)

        title = get_feed_service().catalog.get_title(title_id)
        if title is None:
            return _json_response({"error": f"Title {title_id} not found"}, 404)

        return _json_response(title.to_dict())

    except Exception as e:
        logger.error(f"Error getting title: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


@bp.route(route="search", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def search_titles(req: func.HttpRequest) -> func.HttpResponse:
    """
    Search the catalog by title name.

    Query Parameters:
        - q: Search text (blank returns a browse list)
    """
    try:
        query = req.params.get('q', '')
        titles = get_feed_service().catalog.search(query)

        return _json_response({
            "query": query,
            "count": len(titles),
            "titles": [title.to_dict() for title in titles]
        })

    except Exception as e:
        logger.error(f"Error searching titles: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


# noinspection PyUnusedLocal
@bp.route(route="recs/health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint."""
    return _json_response({
        "status": "healthy",
        "service": "vibefeed-recommendation-service",
        "version": "1.0.0"
    })

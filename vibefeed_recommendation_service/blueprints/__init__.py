"""Azure Functions blueprints"""

from vibefeed_recommendation_service.blueprints.feed_bp import bp as feed_bp

__all__ = ["feed_bp"]

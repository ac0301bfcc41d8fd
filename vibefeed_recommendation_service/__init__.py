"""VibeFeed recommendation service: taste-profile driven discovery feed."""

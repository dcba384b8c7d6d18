"""Infrastructure layer - database lifecycle, logging, rate limiting."""

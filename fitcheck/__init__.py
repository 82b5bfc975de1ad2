"""fitcheck package."""

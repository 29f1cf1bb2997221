"""API and webhook payload schemas (pydantic)."""

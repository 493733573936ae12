"""caredesk_api - FastAPI admin surface for the caredesk back office."""

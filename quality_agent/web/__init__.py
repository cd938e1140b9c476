"""Web layer: FastAPI routes over the analysis engine."""

"""FastAPI edge over the contactbook core."""

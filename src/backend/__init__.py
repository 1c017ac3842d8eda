"""FastAPI backend for UGC Studio."""

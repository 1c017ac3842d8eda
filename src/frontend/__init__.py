"""Streamlit frontend for UGC Studio."""

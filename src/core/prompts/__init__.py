"""Prompt templates for the studio agents."""

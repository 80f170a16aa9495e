"""Configuration — TOML discovery, pydantic models, unified settings, logging."""

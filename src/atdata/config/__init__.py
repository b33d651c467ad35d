"""Configuration — pydantic models, atdata.toml discovery, and logging setup."""

"""Configuration — TOML models, unified settings, and logging setup."""

"""Core domain logic: parsing, models, prompts, configuration and storage."""

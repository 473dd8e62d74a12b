"""Configuration, logging, errors, security and storage shared by the application."""

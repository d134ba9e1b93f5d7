"""Configuration, logging and the application error taxonomy."""

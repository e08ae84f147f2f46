"""Configuration, logging, storage and error kinds shared by the app."""

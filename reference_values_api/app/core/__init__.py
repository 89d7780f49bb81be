"""Configuration, logging, error types and access control."""

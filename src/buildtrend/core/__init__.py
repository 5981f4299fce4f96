"""Logging, configuration and error types shared across buildtrend."""

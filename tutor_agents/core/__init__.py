"""Exceptions, logging and rate limiting."""

"""Multi-agent AI tutor service."""

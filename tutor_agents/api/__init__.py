"""HTTP API for the AI Tutor."""

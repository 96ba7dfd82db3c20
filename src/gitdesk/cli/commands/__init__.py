"""gitdesk CLI commands."""

"""User-facing entry points for the chat device."""

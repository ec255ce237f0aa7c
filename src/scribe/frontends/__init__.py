"""User interfaces for scribe."""

"""DreamRate: dream journal data access and auth over a hosted Supabase store."""

__version__ = "0.1.0"

"""Service layer for URL Shortener Service."""

"""Core constants, exceptions and domain pillars."""

"""UI-facing domain package: node edit flow."""

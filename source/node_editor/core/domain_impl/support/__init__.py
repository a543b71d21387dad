"""Support domain package: clipboard and crash logging."""

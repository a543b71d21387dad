"""Infra domain package: runtime paths, settings and file writes."""

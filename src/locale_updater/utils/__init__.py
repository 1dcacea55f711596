"""Shared utilities for locale-updater."""

"""Shared utilities for devrunner."""

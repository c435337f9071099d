"""Shared utilities for arfocus."""

"""Shared helpers for the localization pipeline."""

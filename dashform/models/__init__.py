"""Dashform models."""

"""Shared cross-cutting helpers. No business logic."""

"""Shared helpers for todolist-cli."""

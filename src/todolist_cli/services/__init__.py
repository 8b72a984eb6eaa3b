"""Service layer for todolist-cli."""

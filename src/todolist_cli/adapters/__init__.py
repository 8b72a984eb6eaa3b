"""Storage adapters for todolist-cli."""

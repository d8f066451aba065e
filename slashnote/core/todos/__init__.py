"""Todo tracking consulted by the /todo and /done commands."""

from slashnote.core.todos.tracker import InMemoryTodoTracker, TodoTracker

__all__ = ["InMemoryTodoTracker", "TodoTracker"]

"""Task plugins. Each plugin ships a schema, a task and a route factory."""

"""Route handlers, wired up from the route registry by WebServer."""

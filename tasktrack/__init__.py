"""TaskTrack - personal task management API and dashboard client."""

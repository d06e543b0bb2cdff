"""Month-grid task planner."""

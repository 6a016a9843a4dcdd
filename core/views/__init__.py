"""Role-gated views grouped by audience."""

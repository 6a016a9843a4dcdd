"""Service layer classes used by the views and the API."""

"""Multi-tenant registration, login and session API."""

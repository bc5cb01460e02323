"""Web page and status API."""

"""Navigation data source."""

ABOUT = {
    "name": "Navigation",
    "author": {"name": "Inkstone Team", "email": "team@example.com"},
    "version": "1.1",
    "release-date": "2024-03-12",
}

SOURCE = "navigation"

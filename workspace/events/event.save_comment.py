"""Save comment event."""

ABOUT = {
    "name": "Save Comment",
    "author": {"name": "Inkstone Team", "website": "https://example.com"},
    "version": "1.0",
    "release-date": "2024-06-20",
}

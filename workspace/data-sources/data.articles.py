"""Articles data source."""

ABOUT = {
    "name": "Articles",
    "author": {"name": "Inkstone Team", "website": "https://example.com", "email": "team@example.com"},
    "version": "1.0",
    "release-date": "2024-05-01",
}

SOURCE = "articles"

"""
Test Suite for the Library Catalog

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_validation.py: Field validation and store error mapping
- test_authors.py: Tests for /authors endpoints
- test_books.py: Tests for /books endpoints
- test_app.py: Error body shape, CORS, health
- test_events.py: Event bus
- test_api_client.py: HTTP client error handling
- test_views.py: List views driven end-to-end through the API

Running Tests:
    pytest
    pytest tests/test_books.py -v
"""

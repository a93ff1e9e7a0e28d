"""
Test suite for the Case Pack Uploader.

Run all tests: pytest
Run with coverage: pytest --cov=. --cov-report=html
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_validation_service.py -v
"""

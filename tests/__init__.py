"""Test suite for the DWARF argument-order checker.

Test Structure:
- application/: Driver and CSV summary
- config/: Configuration management
- core/: Location evaluation, line tables and function enumeration
- domain/: Reconciler, orderer, source extractor, classifier, caches
- infrastructure/: Logging setup

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
    BINARY_PATH=./prog pytest -m integration
"""

"""
Core utilities for fluent-mailerlite.

This package holds:
- configuration loading (`config.py`, `config_storage.py`)
- shared error types (`errors.py`)
- logging helpers (`logging.py`)
- DTO base class and validation helpers (`dto.py`, `validation.py`)
"""

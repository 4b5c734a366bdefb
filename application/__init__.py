"""
Application Layer for the workout sync service.

This package contains:
- ports/: Repository and service interfaces (what the domain needs)
- use_cases/: Application operations coordinating entities and ports
"""

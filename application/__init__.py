"""
Application Layer for the Program Conversion API.

This package contains:
- ports/: Abstract repository interfaces (what the engine needs)
- services/: Normalizer, resolver, materializer, schedule writer
- use_cases/: Conversion and reconciliation entry points
- exceptions.py: Error hierarchy shared by every layer
"""

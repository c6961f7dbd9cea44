"""Integration tests.

Purpose
- Exercise several layers together through `strata.bootstrap.bootstrap()`:
  declarations, the bootstrap phase, splicing, and live updates reaching
  container handlers.

Guidelines
- Use the in-memory config service, seeded from JSON files where the
  directory loader is part of what is being tested.
- Pass explicit environments so real environment variables never leak in.
"""

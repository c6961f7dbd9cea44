"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real I/O; the in-memory config service stands in for the remote client.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""

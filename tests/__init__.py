"""Test package for skylog.

Contains unit tests for routing, buffering, flushing and the stream adapter,
concurrency tests for multi-threaded logging, and BDD-style feature tests
for end-to-end scenarios.

Test Organisation
-----------------
- Unit tests (test_*.py): Test individual components such as channels, the
  flusher, the router, configuration and the stdlib bridge.
- BDD tests (features/): Gherkin feature files with step definitions in
  steps/.
- Shared fixtures (conftest.py): pytest fixtures including
  `router_factory` for routers closed after each test and
  `_clean_default_router` for automatic reset of the default router.
- Shared helpers (helpers.py): In-memory sinks and utilities such as
  `poll_sink_for_text` for verifying background flushes.

Running Tests
-------------
Run all tests::

    pytest tests/

Run BDD tests only::

    pytest tests/steps/

Run the concurrency tests::

    pytest -m concurrency
"""

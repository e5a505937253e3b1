"""
Unit Tests - Single Component Tests.

Each module exercises one component (expression model, engines,
stages, validator, config, observability) in isolation. Stage tests run
against the InMemoryEngine so pandas is not in the loop.
"""

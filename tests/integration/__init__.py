"""
Integration Tests - End-to-End Pipeline Tests.

These tests verify that all components work together correctly.
Pipeline tests use the InMemoryEngine to avoid filesystem access;
the end-to-end and CLI tests read CSV and write Parquet under tmp_path.

Test Files:
    - test_player_pipeline.py: Full run with the in-memory engine
    - test_pandas_end_to_end.py: CSV in, Parquet out
    - test_engine_parity.py: Both engines agree on the same data
    - test_cli.py: Exit codes and flags of the command-line driver
"""

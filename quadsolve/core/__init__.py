"""Core data types and test-case IO."""

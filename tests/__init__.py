"""
Remote Config Admin Client - Test Suite Package.

Unit tests for the validator primitives, the Template/Version models,
the REST transport (HTTP session mocked), the service facade and the
settings loader.
"""

"""
Pytest configuration and shared fixtures for idlgen tests.

This module provides common test fixtures, configuration, and utilities
used across the test suite.
"""

import logging
import re

import pytest

from idlgen.codegen.generator import Generator
from idlgen.codegen.importer import Importer
from idlgen.codegen.typespec import (
    BINARY,
    I32,
    I64,
    STRING,
    EnumSpec,
    ListSpec,
    MapSpec,
    SetSpec,
    StructSpec,
    TypedefSpec,
)
from idlgen.utils.config import GenerationConfig, set_config


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch, tmp_path):
    """Keep tests independent of config files and the environment."""
    monkeypatch.delenv("IDLGEN_CONFIG", raising=False)
    monkeypatch.delenv("IDLGEN_PACKAGE_NAME", raising=False)
    monkeypatch.delenv("IDLGEN_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    set_config(None)
    yield
    set_config(None)


# Engine fixtures
@pytest.fixture
def importer():
    """Create a fresh Importer instance."""
    return Importer()


@pytest.fixture
def generator():
    """Create a Generator with the default output policy."""
    return Generator()


@pytest.fixture
def make_generator():
    """Factory for generators with a custom output policy."""
    def factory(**overrides):
        return Generator(GenerationConfig(**overrides))
    return factory


# Type model fixtures
@pytest.fixture
def sample_types():
    """A small IDL type model covering every kind of type."""
    status = EnumSpec("status", items=(("OK", 0), ("FAILED", 1)))
    user_ids = TypedefSpec("user_ids", target=ListSpec(I64))
    user_id = TypedefSpec("user_id", target=I64)
    user = StructSpec(
        "user_record",
        fields=(
            ("id", user_id, True),
            ("name", STRING, True),
            ("email", STRING, False),
            ("tags", SetSpec(STRING), False),
            ("attributes", MapSpec(STRING, BINARY), False),
            ("status", status, False),
            ("score", I32, False),
        ),
    )
    return {
        "status": status,
        "user_ids": user_ids,
        "user_id": user_id,
        "user": user,
    }


# Logging fixtures
class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)

    def messages(self, level=None):
        return [
            record.getMessage() for record in self.records
            if level is None or record.levelno == level
        ]


@pytest.fixture
def log_records():
    """
    Capture records sent to the idlgen logger.

    The package logger does not propagate, so records are collected by a
    handler attached to it directly.
    """
    logger = logging.getLogger("idlgen")
    handler = _RecordingHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous_level)


@pytest.fixture
def restore_logging():
    """Restore the package logger after tests that reconfigure it."""
    logger = logging.getLogger("idlgen")
    level = logger.level
    handlers = logger.handlers[:]
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


# Utility functions
def assert_go_contains_pattern(go_code: str, pattern: str, description: str = ""):
    """
    Assert that generated Go code contains a specific pattern.

    Args:
        go_code: Generated Go code
        pattern: Regex pattern to match (multiline mode)
        description: Description of what the pattern checks
    """
    if not re.search(pattern, go_code, re.MULTILINE):
        pytest.fail(f"Go pattern check failed: {description}\nPattern: {pattern}\nGo:\n{go_code}")


def assert_go_not_contains_pattern(go_code: str, pattern: str, description: str = ""):
    """
    Assert that generated Go code does NOT contain a specific pattern.

    Args:
        go_code: Generated Go code
        pattern: Regex pattern that should not match (multiline mode)
        description: Description of what the pattern checks
    """
    if re.search(pattern, go_code, re.MULTILINE):
        pytest.fail(f"Go anti-pattern check failed: {description}\nPattern: {pattern}\nGo:\n{go_code}")


@pytest.fixture
def go_check():
    """FileCheck-style helpers for generated Go code."""
    class GoCheck:
        contains = staticmethod(assert_go_contains_pattern)
        not_contains = staticmethod(assert_go_not_contains_pattern)

    return GoCheck

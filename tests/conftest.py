"""Shared fixtures for the moderation test suite."""

import random
import textwrap

import pytest

from moderation.core.loader import RuleLoader
from moderation.engine.detector import OffPlatformDetector
from moderation.logic.normalizer import DescriptionNormalizer
from moderation.service.audit import InMemoryAuditLog


@pytest.fixture(scope="session")
def detector():
    return OffPlatformDetector()


@pytest.fixture(scope="session")
def warnings():
    return RuleLoader.get_instance().get_warnings()


@pytest.fixture
def normalizer():
    return DescriptionNormalizer(corrections=RuleLoader.get_instance().get_corrections())


@pytest.fixture
def audit():
    return InMemoryAuditLog()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def write_catalogue(tmp_path):
    """Write a YAML catalogue to a temporary file and return its path."""

    def _write(body: str):
        path = tmp_path / "rules.yaml"
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path

    return _write

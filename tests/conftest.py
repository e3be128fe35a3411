"""Pytest configuration and fixtures for record_store tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from record_store.adapters.outbound import FileRecordStore
from record_store.domain.entities import Record
from record_store.infrastructure.config import Config, StorageConfig
from record_store.infrastructure.logging import setup_logging
from record_store.infrastructure.metrics import MetricsRegistry


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging() -> None:
    """Keep per-record debug events out of test output."""
    setup_logging(level="WARNING", log_format="console")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration rooted in a temporary directory."""
    return Config(
        storage=StorageConfig(
            data_dir=temp_dir / "data",
            default_filename="records.bin",
            fsync_on_close=False,  # Faster for tests
        ),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def store(
    temp_dir: Path, test_config: Config, metrics_registry: MetricsRegistry
) -> Generator[FileRecordStore[Record], None, None]:
    """Provide an open, empty store of Records."""
    s = FileRecordStore(
        temp_dir / "records.bin",
        Record,
        config=test_config,
        metrics=metrics_registry,
    )
    yield s
    if s.is_open:
        s.close()


@pytest.fixture
def sample_records() -> list[Record]:
    """The three records used throughout the exercises."""
    return [
        Record(id=1, score=100.0, name="Ibrahim"),
        Record(id=2, score=100.0, name="Maybe"),
        Record(id=3, score=100.0, name="Again"),
    ]


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")

"""Tests for tunevault.config."""

from __future__ import annotations

import pytest

from tunevault import config


def test_validate_config_requires_bucket(monkeypatch):
    monkeypatch.setattr(config, "AWS_BUCKET_NAME", "")
    with pytest.raises(RuntimeError, match="AWS_BUCKET_NAME"):
        config.validate_config()


def test_validate_config_ok(monkeypatch):
    monkeypatch.setattr(config, "AWS_BUCKET_NAME", "music")
    config.validate_config()


def test_defaults():
    assert config.LIBRARY_PREFIX.endswith("/")
    assert config.CACHE_CONTROL == "public, max-age=31536000"

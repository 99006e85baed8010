"""Shared fixtures for repomanifest tests."""

import copy

import pytest

from repomanifest.infra import ManifestStore
from repomanifest.serialization import parse_manifest


SDK_RECORD = {
    "name": "wayru-sdk",
    "source": "https://github.com/Wayru-Network/wayru-sdk",
    "workspace": "packages/wayru-sdk",
    "category": "package",
    "priority": "critical",
    "status": "forked",
    "description": "Core client library",
    "technologies": ["TypeScript"],
    "maintainers": ["dev@wayru.io"],
    "upstreamSync": {
        "enabled": True,
        "lastSync": None,
        "branch": "main",
    },
}

APP_RECORD = {
    "name": "hotspot-app",
    "source": "https://github.com/Wayru-Network/hotspot-app",
    "workspace": "apps/hotspot-app",
    "category": "app",
    "priority": "important",
    "status": "pending",
    "description": "Mobile dashboard",
    "technologies": ["React Native"],
    "maintainers": [],
    "upstreamSync": {
        "enabled": False,
        "lastSync": "2024-05-01T12:30:00.000Z",
        "branch": "develop",
    },
}


def make_record(**overrides):
    """A valid repository dict with top-level fields overridden."""
    record = copy.deepcopy(SDK_RECORD)
    record.update(overrides)
    return record


def make_manifest_dict(*records):
    return {
        "version": "1.0.0",
        "lastUpdated": "2024-06-01T00:00:00.000Z",
        "repositories": [copy.deepcopy(r) for r in records],
    }


@pytest.fixture
def manifest_dict():
    """A valid two-repository manifest as plain data."""
    return make_manifest_dict(SDK_RECORD, APP_RECORD)


@pytest.fixture
def manifest(manifest_dict):
    return parse_manifest(manifest_dict)


@pytest.fixture
def store(tmp_path, manifest):
    """A store holding the two-repository manifest under tmp_path."""
    store = ManifestStore(tmp_path / ".wayruco" / "manifest.json")
    store.save(manifest)
    return store

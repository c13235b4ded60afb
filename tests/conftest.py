"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest

from nexusview.core.log import Log
from nexusview.core.models import Entity
from nexusview.core.snapshot import SnapshotSource
from nexusview.ui.expansion import ExpansionStore, MemoryBackend
from nexusview.ui.grouping import GroupLevel
from nexusview.ui.headless import HeadlessHost
from nexusview.ui.pool import WidgetPool
from nexusview.ui.renderer import TreeRenderer


def make_entity(entity_id, name, kind="currency", owner=None, quantity=1, icon="icon", **tags):
    """Build an Entity; keyword arguments become tags, `data=` becomes the data dict."""
    data = tags.pop("data", {})
    return Entity(
        entity_id=entity_id,
        name=name,
        kind=kind,
        owner=owner,
        tags={k: v for k, v in tags.items() if v is not None},
        quantity=quantity,
        icon=icon,
        data=data,
    )


@pytest.fixture
def entity():
    """Factory fixture building test entities."""
    return make_entity


@pytest.fixture
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def snapshot_data(fixtures_dir):
    """Load the sample snapshot from the JSON fixture."""
    with open(fixtures_dir / "snapshot.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def source(snapshot_data):
    return SnapshotSource.from_dict(snapshot_data)


@pytest.fixture
def scenario_entities():
    """Alice (online) with 3 currencies under 'War Within', Bob (offline) with 1 under 'Legion'."""
    return [
        make_entity(1, "Valorstones", owner="Alice-Realm", header="War Within", quantity=100),
        make_entity(2, "Kej", owner="Alice-Realm", header="War Within", quantity=5),
        make_entity(3, "Resonance Crystals", owner="Alice-Realm", header="War Within", quantity=40),
        make_entity(4, "Legionfall War Supplies", owner="Bob-Realm", header="Legion", quantity=7),
    ]


@pytest.fixture
def scenario_levels():
    """Character level (online expanded, others collapsed) then header in appearance order."""
    return [
        GroupLevel(
            segment="char",
            classify=lambda e: e.owner,
            sort_key=lambda key: (key != "Alice-Realm", key),
            label=lambda key: key.split("-")[0],
            default_expanded=lambda key: key == "Alice-Realm",
        ),
        GroupLevel(segment="header", classify=lambda e: e.tag("header"), appearance_order=True),
    ]


@pytest.fixture
def host():
    return HeadlessHost(width=600)


@pytest.fixture
def container(host):
    return host.create_container()


@pytest.fixture
def pool(host):
    return WidgetPool(host)


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return ExpansionStore(backend)


@pytest.fixture
def renderer(host, pool, store):
    return TreeRenderer(host, pool, store)


@pytest.fixture
def verbose_log():
    """Record every log level during the test, restoring quiet logging afterwards."""
    Log.clear()
    Log.set_verbosity(5)
    yield Log
    Log.set_verbosity(0)
    Log.clear()

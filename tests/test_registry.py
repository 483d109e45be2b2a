from __future__ import annotations

import warnings

import pytest
from pydantic import ValidationError

from conftest import RecordingPlugin
from grid_games.protocol.errors import PluginIndexError, RegistryFrozenError
from grid_games.registry import PluginRegistry, load_plugins


def test_register_returns_insertion_index_and_allows_duplicate_names():
    registry = PluginRegistry()
    first = RecordingPlugin(name="Same")
    second = RecordingPlugin(name="Same")

    assert registry.register(first) == 0
    assert registry.register(second) == 1
    assert registry.get(0) is first
    assert registry.get(1) is second
    assert [d.name for d in registry.descriptors()] == ["Same", "Same"]
    assert len(registry) == 2
    assert list(registry) == [first, second]


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_get_out_of_range_raises(index):
    registry = PluginRegistry()
    registry.register(RecordingPlugin())
    registry.register(RecordingPlugin())

    with pytest.raises(PluginIndexError) as excinfo:
        registry.get(index)
    assert excinfo.value.count == 2
    assert isinstance(excinfo.value, IndexError)


def test_frozen_registry_rejects_registration():
    registry = PluginRegistry()
    registry.freeze()
    with pytest.raises(RegistryFrozenError):
        registry.register(RecordingPlugin())


def test_plugin_missing_method_is_rejected():
    class Broken:
        def get_game_name(self):
            return "Broken"

    with pytest.raises(TypeError, match="missing required method"):
        PluginRegistry().register(Broken())


def test_plugin_with_empty_grid_is_rejected():
    with pytest.raises(ValidationError):
        PluginRegistry().register(RecordingPlugin(width=0))


def test_load_plugins_uses_bundled_games_in_order():
    registry = load_plugins()
    assert [d.name for d in registry.descriptors()] == ["Rocks Paper Scissors", "Memory"]
    assert (registry.descriptor(1).grid_width, registry.descriptor(1).grid_height) == (4, 4)


def test_load_plugins_skips_broken_paths_with_warning():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        registry = load_plugins(
            [
                "grid_games.plugins.does_not_exist",
                "grid_games.plugins.memory.game:Plugin",
            ]
        )

    assert [d.name for d in registry.descriptors()] == ["Memory"]
    assert any(issubclass(w.category, RuntimeWarning) for w in caught)


def test_seed_skips_rng_for_factories_without_it():
    registry = load_plugins(
        [
            "conftest:RecordingPlugin",
            "grid_games.plugins.rockpaperscissors.game",
        ],
        seed=1,
    )
    assert [d.name for d in registry.descriptors()] == ["Recorder", "Rocks Paper Scissors"]


def test_seed_makes_memory_layout_reproducible():
    first = load_plugins(["grid_games.plugins.memory.game"], seed=11).get(0)
    second = load_plugins(["grid_games.plugins.memory.game"], seed=11).get(0)
    board = [first.state.game.item_at(i) for i in range(first.state.game.size)]
    assert board == [second.state.game.item_at(i) for i in range(second.state.game.size)]

import pytest

from proximity_reveal.config import MODULE_ID
from proximity_reveal.scene import (
    Grid,
    StoreUpdateError,
    Token,
    TokenConfig,
    WorldStore,
    parse_distance,
    parse_flag_bool,
)


@pytest.mark.parametrize("raw, expected", [
    (30, 30.0),
    ("15", 15.0),
    (2.5, 2.5),
    (None, None),
    ("", None),
    ("  ", None),
    ("ten", None),
    (float("nan"), None),
    (0, None),
    (-10, None),
    ([], None),
])
def test_parse_distance(raw, expected):
    assert parse_distance(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    (None, None),
    (True, True),
    (False, False),
    ("on", True),
    ("true", True),
    ("false", False),
    ("", False),
    (1, True),
])
def test_parse_flag_bool(raw, expected):
    assert parse_flag_bool(raw) is expected


def test_config_from_flags_ignores_other_modules():
    flags = {'other-module': {'distance': 99}, MODULE_ID: {'stealthOnCreate': True}}
    config = TokenConfig.from_flags(flags)
    assert config == TokenConfig(min_visibility_distance_feet=None, stealth_on_create=True)
    assert not config.has_threshold


@pytest.mark.parametrize("flags", [{MODULE_ID: "30"}, {MODULE_ID: 5}, {MODULE_ID: [1]}, "junk", [1], None])
def test_config_from_malformed_flags_is_unset(flags):
    assert TokenConfig.from_flags(flags) == TokenConfig()


def test_store_loads_world_with_malformed_namespace(world_data):
    world_data['scenes'][0]['tokens'][1]['flags'] = {MODULE_ID: "30"}
    world_data['actors'][1]['prototypeToken'] = "junk"
    store = WorldStore.from_dict(world_data)
    token = store.active_scene.get_token('near')
    assert token.hidden is True
    assert token.config == TokenConfig()
    assert store.get_actor('goblin').prototype_config == TokenConfig()


def test_config_to_flags_omits_unset_values():
    assert TokenConfig().to_flags() == {MODULE_ID: {}}
    assert TokenConfig(30.0, False).to_flags() == {MODULE_ID: {'distance': 30.0, 'stealthOnCreate': False}}


def test_grid_from_dict():
    assert Grid.from_dict(None) == Grid(size=100.0, distance=5.0, units="ft")
    assert Grid.from_dict({'size': 50, 'distance': 2, 'units': ''}).units == ""


def test_token_from_dict_parses_flags_once():
    token = Token.from_dict({'_id': 't', 'actorId': 'a', 'hidden': 1,
                             'flags': {MODULE_ID: {'distance': '20'}}})
    assert token.hidden is True
    assert token.config.min_visibility_distance_feet == 20.0
    assert token.x is None and token.width is None


def test_store_loads_world(store):
    assert store.active_scene_id == 's1'
    assert [t.id for t in store.active_scene.tokens] == ['hero-tok', 'near', 'far', 'prop']
    assert store.get_actor('hero').has_player_owner
    assert store.get_participant('gm').privileged
    assert store.get_scene(None) is None


def test_store_update_is_atomic(store):
    with pytest.raises(StoreUpdateError):
        store.update_tokens('s1', [{'_id': 'near', 'hidden': False}, {'_id': 'ghost', 'hidden': True}])
    assert store.get_scene('s1').get_token('near').hidden is True

    store.update_tokens('s1', [{'_id': 'near', 'hidden': False}])
    assert store.get_scene('s1').get_token('near').hidden is False


def test_store_rejects_unknown_scene(store):
    with pytest.raises(StoreUpdateError):
        store.update_tokens('nope', [])


def test_store_set_token_config(store):
    store.set_token_config('s1', 'prop', TokenConfig(min_visibility_distance_feet=5))
    assert store.get_scene('s1').get_token('prop').config.min_visibility_distance_feet == 5
    with pytest.raises(StoreUpdateError):
        store.set_token_config('s1', 'ghost', TokenConfig())

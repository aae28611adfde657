import pytest

from proximity_reveal.config import MODULE_ID
from proximity_reveal.scene import Actor, Grid, Scene, Token, TokenConfig
from proximity_reveal.visibility import TokenUpdate, desired_hidden_state, player_anchors, resolve

from conftest import token_at


def scene_of(grid, *tokens):
    return Scene(id="s", grid=grid, tokens=list(tokens))


def test_target_within_threshold_is_revealed(grid, actors):
    scene = scene_of(grid, token_at("hero", 0, 0, "hero"), token_at("gob", 200, 0, "goblin", hidden=True, distance=10))
    assert resolve(scene, actors) == [TokenUpdate("gob", False)]


def test_target_beyond_threshold_is_hidden(grid, actors):
    scene = scene_of(grid, token_at("hero", 0, 0, "hero"), token_at("gob", 300, 0, "goblin", distance=10))
    assert resolve(scene, actors) == [TokenUpdate("gob", True)]


def test_exact_boundary_reveals(grid, actors):
    anchors = [token_at("hero", 0, 0, "hero")]
    token = token_at("gob", 0, 200, "goblin", hidden=True, distance=10)
    assert desired_hidden_state(token, anchors, grid, actors) is False


def test_nearest_anchor_is_used(grid):
    actors = {
        'p1': _player('p1'),
        'p2': _player('p2'),
    }
    scene = scene_of(
        grid,
        token_at("far-hero", 2000, 0, "p1"),
        token_at("near-hero", 100, 0, "p2"),
        token_at("gob", 0, 0, "goblin", hidden=True, distance=5),
    )
    assert resolve(scene, actors) == [TokenUpdate("gob", False)]


@pytest.mark.parametrize("hidden", [True, False])
def test_no_threshold_preserves_state(grid, actors, hidden):
    anchors = [token_at("hero", 0, 0, "hero")]
    token = token_at("gob", 5000, 0, "goblin", hidden=hidden)
    assert desired_hidden_state(token, anchors, grid, actors) is hidden
    assert desired_hidden_state(token, [], grid, actors) is hidden


@pytest.mark.parametrize("flags", [
    *({MODULE_ID: {'distance': raw}} for raw in [None, "", "abc", float("nan"), 0, -5, "0"]),
    {MODULE_ID: "30"},
    {MODULE_ID: 5},
    {MODULE_ID: [1]},
    "junk",
    [1],
])
def test_malformed_threshold_is_a_noop(grid, actors, flags):
    token = Token.from_dict({'_id': "gob", 'actorId': "goblin", 'hidden': True, 'flags': flags})
    scene = scene_of(grid, token_at("hero", 0, 0, "hero"), token)
    assert resolve(scene, actors) == []


def test_zero_anchors_hides_thresholded_tokens(grid, actors):
    scene = scene_of(
        grid,
        token_at("gob", 0, 0, "goblin", hidden=False, distance=1000),
        token_at("gob2", 50, 0, "goblin", hidden=True, distance=5),
    )
    assert resolve(scene, actors) == [TokenUpdate("gob", True)]


def test_player_tokens_always_visible(grid, actors):
    hidden_hero = Token(id="hero", actor_id="hero", x=0, y=0, hidden=True,
                        config=TokenConfig(min_visibility_distance_feet=1))
    scene = scene_of(grid, hidden_hero)
    assert player_anchors(scene, actors) == [hidden_hero]
    assert resolve(scene, actors) == [TokenUpdate("hero", False)]
    assert desired_hidden_state(hidden_hero, [], grid, actors) is False


def test_token_without_actor_is_not_an_anchor(grid, actors):
    scene = scene_of(grid, token_at("statue", 0, 0), token_at("gob", 0, 0, "goblin", distance=10))
    assert player_anchors(scene, actors) == []
    assert resolve(scene, actors) == [TokenUpdate("gob", True)]


def test_threshold_converted_to_scene_units(actors):
    metric = Grid(size=100, distance=1.5, units="meters")
    # 20ft = 6.096m; 4 cases = 6m -> visible, 5 cases = 7.5m -> caché
    near = token_at("near", 400, 0, "goblin", hidden=True, distance=20)
    far = token_at("far", 500, 0, "goblin", hidden=False, distance=20)
    scene = scene_of(metric, token_at("hero", 0, 0, "hero"), near, far)
    assert resolve(scene, actors) == [TokenUpdate("near", False), TokenUpdate("far", True)]


def test_resolve_is_minimal_and_idempotent(grid, actors):
    scene = scene_of(
        grid,
        token_at("hero", 0, 0, "hero"),
        token_at("ok-visible", 100, 0, "goblin", hidden=False, distance=10),
        token_at("ok-hidden", 900, 0, "goblin", hidden=True, distance=10),
    )
    assert resolve(scene, actors) == []
    assert resolve(scene, actors) == []


def test_update_payload():
    assert TokenUpdate("t1", True).to_dict() == {'_id': "t1", 'hidden': True}


def _player(actor_id):
    return Actor(id=actor_id, has_player_owner=True)

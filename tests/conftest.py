import pytest

from proximity_reveal.config import MODULE_ID
from proximity_reveal.scene import Actor, Grid, Participant, Token, TokenConfig, WorldStore


def token_at(token_id, cx, cy, actor_id=None, hidden=False, distance=None, cell=100.0, stealth=None):
    """Token d'une case centré sur (cx, cy)"""
    return Token(
        id=token_id,
        actor_id=actor_id,
        x=cx - cell / 2,
        y=cy - cell / 2,
        width=1,
        height=1,
        hidden=hidden,
        name=token_id,
        config=TokenConfig(min_visibility_distance_feet=distance, stealth_on_create=stealth),
    )


@pytest.fixture
def actors():
    return {
        'hero': Actor(id='hero', name='Hero', has_player_owner=True),
        'goblin': Actor(id='goblin', name='Goblin'),
    }


@pytest.fixture
def grid():
    return Grid(size=100.0, distance=5.0, units="ft")


@pytest.fixture
def world_data():
    return {
        'activeScene': 's1',
        'users': [
            {'_id': 'gm', 'name': 'GM', 'isGM': True, 'active': True, 'endpoint': 'http://gm.local:5000'},
            {'_id': 'alice', 'name': 'Alice', 'isGM': False, 'active': True},
        ],
        'actors': [
            {'_id': 'hero', 'name': 'Hero', 'hasPlayerOwner': True},
            {'_id': 'goblin', 'name': 'Goblin', 'hasPlayerOwner': False},
        ],
        'scenes': [
            {
                '_id': 's1',
                'name': 'Crypt',
                'grid': {'size': 100, 'distance': 5, 'units': 'ft'},
                'tokens': [
                    {'_id': 'hero-tok', 'actorId': 'hero', 'x': -50, 'y': -50, 'hidden': False},
                    {'_id': 'near', 'actorId': 'goblin', 'x': 150, 'y': -50, 'hidden': True,
                     'flags': {MODULE_ID: {'distance': 10}}},
                    {'_id': 'far', 'actorId': 'goblin', 'x': 250, 'y': -50, 'hidden': False,
                     'flags': {MODULE_ID: {'distance': 10}}},
                    {'_id': 'prop', 'x': 900, 'y': 900, 'hidden': True},
                ],
            },
            {'_id': 's2', 'name': 'Road', 'tokens': []},
        ],
    }


@pytest.fixture
def store(world_data):
    return WorldStore.from_dict(world_data)


@pytest.fixture
def participants():
    return [
        Participant(id='alice', privileged=False, active=True),
        Participant(id='gm-away', privileged=True, active=False),
        Participant(id='gm', privileged=True, active=True),
    ]

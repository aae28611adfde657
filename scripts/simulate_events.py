#!/usr/bin/env python3
"""
Rejouer une séquence d'événements de l'hôte sur un monde JSON
Le service du writer est branché sur un HookRegistry: les rafales sont
regroupées par le debouncer, un token posé lance sa Discrétion.

Usage:
  python scripts/simulate_events.py [world.json]
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from proximity_reveal.coordination import HookRegistry, VisibilityService, current_writer
from proximity_reveal.coordination import hooks as hook_names
from proximity_reveal.logging_config import setup_logging
from proximity_reveal.scene import Token, WorldStore
from proximity_reveal.stealth import StealthRoller


async def settle(service):
    """Laisser le debouncer déclencher puis attendre le recalcul"""
    while service.debouncer.pending:
        await asyncio.sleep(0)
    task = service.debouncer.last_task
    return await task if task is not None else []


async def replay(service, hooks):
    print("\n🗺️  canvasReady")
    hooks.call(hook_names.CANVAS_READY)
    for update in await settle(service):
        state = "🌫️  caché" if update.hidden else "✅ révélé"
        print(f"   {update.token_id}: {state}")

    print("\n🏃 updateToken x3 (même tick)")
    hero = service.store.active_scene.tokens[0]
    for x in (25, 50, 75):
        hooks.call(hook_names.UPDATE_TOKEN, hero, {'x': x})
    updates = await settle(service)
    print(f"   Un seul recalcul, {len(updates)} changement(s)")

    print("\n🗡️  createToken (Assassin)")
    assassin = Token(id='tok-assassin', actor_id='actor-assassin', name='Assassin', x=400, y=0)
    hooks.call(hook_names.CREATE_TOKEN, assassin)
    await settle(service)
    while service.stealth.pending:
        await asyncio.sleep(service.stealth.delay)
    for message in service.stealth.chat.messages:
        print(f"   🎲 {message['flavor']}: {message['formula']} = {message['total']}")


def main():
    setup_logging()

    world_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent.parent / 'data' / 'sample_world.json'
    if not world_path.exists():
        print(f"❌ Monde non trouvé: {world_path}")
        return

    store = WorldStore.load(world_path)
    writer = current_writer(store.participants)
    if writer is None:
        print("❌ Aucun MJ dans le monde")
        return

    service = VisibilityService(store, writer.id, stealth=StealthRoller())
    hooks = HookRegistry()
    service.register(hooks)

    print(f"\n{'='*80}")
    print(f"🎬 ÉVÉNEMENTS - writer {writer.name or writer.id}")
    print(f"{'='*80}")

    asyncio.run(replay(service, hooks))
    print()


if __name__ == '__main__':
    main()

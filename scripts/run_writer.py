#!/usr/bin/env python3
"""
Lancer le serveur du writer (MJ) sur un monde JSON

Variables d'environnement:
  PROXIMITY_REVEAL_WORLD        chemin du monde (défaut: data/sample_world.json)
  PROXIMITY_REVEAL_PARTICIPANT  id du participant local (défaut: writer désigné)
  PROXIMITY_REVEAL_HOST / PROXIMITY_REVEAL_PORT
  PROXIMITY_REVEAL_LOG_LEVEL
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from proximity_reveal.config import Settings
from proximity_reveal.coordination import HttpWriterChannel, VisibilityService, current_writer
from proximity_reveal.logging_config import setup_logging
from proximity_reveal.scene import WorldStore
from proximity_reveal.server import create_app


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    world_path = settings.world_path or Path(__file__).parent.parent / 'data' / 'sample_world.json'
    if not world_path.exists():
        print(f"❌ Monde non trouvé: {world_path}")
        return

    store = WorldStore.load(world_path)

    participant_id = settings.participant_id
    if participant_id is None:
        writer = current_writer(store.participants)
        participant_id = writer.id if writer else None

    service = VisibilityService(store, participant_id, channel=HttpWriterChannel())
    app = create_app(service)

    print("\n" + "="*80)
    print("🎲 PROXIMITY REVEAL - Serveur du writer")
    print("="*80)
    print(f"📍 URL: http://{settings.host}:{settings.port}")
    print(f"👤 Participant: {participant_id} (writer: {service.is_writer})")
    print("="*80 + "\n")
    app.run(host=settings.host, port=settings.port)


if __name__ == '__main__':
    main()

#!/usr/bin/env python3
"""
Simuler le recalcul de visibilité sur un monde JSON
Affiche le rapport par token et l'exporte en CSV

Usage:
  python scripts/simulate_scene.py data/sample_world.json [scene_id]
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from proximity_reveal.scene import WorldStore
from proximity_reveal.visibility import build_visibility_report, summarize_report, write_report_csv, resolve


def main():
    """Rapport de visibilité d'une scène"""
    if len(sys.argv) < 2:
        print("Usage: simulate_scene.py <world.json> [scene_id]")
        return

    world_path = Path(sys.argv[1])
    if not world_path.exists():
        print(f"❌ Monde non trouvé: {world_path}")
        return

    store = WorldStore.load(world_path)
    scene_id = sys.argv[2] if len(sys.argv) > 2 else store.active_scene_id
    scene = store.get_scene(scene_id)

    if scene is None:
        print(f"❌ Scène inconnue: {scene_id}")
        return

    print(f"\n{'='*80}")
    print(f"👁️  VISIBILITÉ - {scene.name or scene.id}")
    print(f"{'='*80}\n")
    print(f"Grille: {scene.grid.size:g}px = {scene.grid.distance:g} {scene.grid.units}")

    df = build_visibility_report(scene, store.actors)
    print(df)

    summary = summarize_report(df)
    print(f"\n📈 Tokens: {summary['tokens']} (ancres joueurs: {summary['anchors']})")
    print(f"   Cachés avant: {summary['hidden_before']}")
    print(f"   Cachés après: {summary['hidden_after']}")
    print(f"   Changements: {summary['changes']}")

    for update in resolve(scene, store.actors):
        state = "🌫️  caché" if update.hidden else "✅ révélé"
        print(f"   {update.token_id}: {state}")

    output_path = Path('data/processed') / f"visibility_{scene.id}.csv"
    write_report_csv(df, output_path)
    print(f"\n📁 Rapport: {output_path}\n")


if __name__ == '__main__':
    main()

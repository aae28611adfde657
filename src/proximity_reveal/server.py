"""
Serveur Flask du writer (MJ)
Reçoit les demandes de recalcul des joueurs et expose l'état de visibilité
"""

import asyncio
import logging

from flask import Flask, jsonify, request

from proximity_reveal.config_form import build_config_form, parse_config_form
from proximity_reveal.coordination.channel import RecomputeRequest
from proximity_reveal.coordination.service import VisibilityService
from proximity_reveal.scene.store import StoreUpdateError
from proximity_reveal.visibility.report import build_visibility_report, summarize_report

logger = logging.getLogger(__name__)


def create_app(service: VisibilityService) -> Flask:
    """Application Flask branchée sur un service de visibilité"""
    app = Flask(__name__)
    store = service.store

    @app.route('/api/health')
    def health():
        return jsonify({
            'status': 'ok',
            'participant': service.participant_id,
            'writer': service.is_writer,
            'activeScene': store.active_scene_id,
        })

    @app.route('/api/recompute', methods=['POST'])
    def recompute():
        """Demande de recalcul transmise par un autre participant"""
        payload = request.get_json(silent=True)
        if RecomputeRequest.from_dict(payload) is None:
            return jsonify({'error': 'Message invalide'}), 400
        if not service.is_privileged:
            return jsonify({'error': 'Participant non MJ'}), 403

        try:
            updates = asyncio.run(service.handle_message(payload))
        except StoreUpdateError as e:
            return jsonify({'error': str(e)}), 409

        return jsonify({'updates': [u.to_dict() for u in updates]})

    @app.route('/api/scenes/<scene_id>/visibility')
    def scene_visibility(scene_id):
        """Rapport de visibilité d'une scène"""
        scene = store.get_scene(scene_id)
        if scene is None:
            return jsonify({'error': 'Scène non trouvée'}), 404

        df = build_visibility_report(scene, store.actors)
        return jsonify({
            'scene_id': scene_id,
            'summary': summarize_report(df),
            'tokens': df.to_dicts(),
        })

    @app.route('/api/scenes/<scene_id>/tokens/<token_id>/config-form')
    def token_config_form(scene_id, token_id):
        scene = store.get_scene(scene_id)
        token = scene.get_token(token_id) if scene else None
        if token is None:
            return jsonify({'error': 'Token non trouvé'}), 404
        return jsonify(build_config_form(token.config))

    @app.route('/api/scenes/<scene_id>/tokens/<token_id>/config', methods=['PUT'])
    def update_token_config(scene_id, token_id):
        """Enregistrer la config d'un token puis recalculer la scène"""
        if not service.is_privileged:
            return jsonify({'error': 'Participant non MJ'}), 403

        if request.is_json:
            form_data = request.get_json(silent=True)
            if not isinstance(form_data, dict):
                return jsonify({'error': 'Formulaire invalide'}), 400
            config = parse_config_form(form_data)
        else:
            config = parse_config_form(request.form.to_dict(), checkbox_form=True)

        try:
            store.set_token_config(scene_id, token_id, config)
        except StoreUpdateError as e:
            return jsonify({'error': str(e)}), 404

        updates = asyncio.run(service.recompute_scene_visibility(scene_id))
        return jsonify({
            'config': config.to_flags(),
            'updates': [u.to_dict() for u in updates],
        })

    return app

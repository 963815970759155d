"""
Web application module for the Courtside substitution tracker.

This module contains the Flask server exposing the game state engine as a
JSON API: one endpoint per state transition plus read endpoints for games,
players and reports.
"""
import logging
from dataclasses import asdict
from typing import Optional

from flask import Flask, Response, jsonify, request

from ..config import Config
from ..errors import CourtsideError, NotFound, PersistenceFailure, PlayerValidationError, StateConflict
from ..models import Game, Player
from ..services.service_factory import ServiceFactory
from ..utils import configure_logging

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Builds every service from one factory so they share the store and locks.
    """

    def __init__(self, factory: Optional[ServiceFactory] = None):
        self.service_factory = factory or ServiceFactory()
        services = self.service_factory.create_complete_service_suite()
        self.game_service = services['games']
        self.player_service = services['players']
        self.report_service = services['reports']


def _status_for(error: CourtsideError) -> int:
    if isinstance(error, StateConflict):
        return 409
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, PlayerValidationError):
        return 400
    if isinstance(error, PersistenceFailure):
        return 500
    return 400


def create_app(factory: Optional[ServiceFactory] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        factory: Service factory to build the engine from; defaults to one
                 configured from the environment

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app_state = WebAppState(factory)
    app.extensions["courtside"] = app_state

    @app.errorhandler(CourtsideError)
    def handle_engine_error(error: CourtsideError):
        status = _status_for(error)
        if status >= 500:
            logger.error("Request %s %s failed: %s", request.method, request.path, error)
        else:
            logger.debug("Request %s %s rejected: %s", request.method, request.path, error)
        return jsonify({"success": False, "error": str(error), "code": error.code}), status

    def _game_data(game: Game) -> dict:
        report = app_state.report_service.report_for(game)
        return asdict(report)

    def _player_data(player: Player) -> dict:
        return player.to_dict()

    @app.route("/ready", methods=["GET"])
    def ready():
        """Readiness probe."""
        return jsonify({"success": True, "status": "ready"})

    # ==================== Games ==================== #

    @app.route("/api/games", methods=["GET"])
    def list_games():
        games = app_state.game_service.list_games()
        return jsonify({"success": True, "games": [_game_data(g) for g in games]})

    @app.route("/api/games", methods=["POST"])
    def create_game():
        game = app_state.game_service.create_game()
        return jsonify({"success": True, "game": _game_data(game)}), 201

    @app.route("/api/games/<int:game_id>", methods=["GET"])
    def get_game(game_id: int):
        game = app_state.game_service.get_game(game_id)
        return jsonify({"success": True, "game": _game_data(game)})

    @app.route("/api/games/<int:game_id>/start", methods=["POST"])
    def start_game(game_id: int):
        game = app_state.game_service.start_game(game_id)
        return jsonify({"success": True, "game": _game_data(game)})

    @app.route("/api/games/<int:game_id>/end", methods=["POST"])
    def end_game(game_id: int):
        game = app_state.game_service.end_game(game_id)
        return jsonify({"success": True, "game": _game_data(game)})

    @app.route("/api/games/<int:game_id>/start-period", methods=["POST"])
    def start_period(game_id: int):
        game = app_state.game_service.start_period(game_id)
        return jsonify({"success": True, "game": _game_data(game)})

    @app.route("/api/games/<int:game_id>/end-period", methods=["POST"])
    def end_period(game_id: int):
        data = request.get_json(silent=True) or {}
        period_index = data.get("period")
        if period_index is not None:
            try:
                period_index = int(period_index)
            except (TypeError, ValueError):
                return jsonify({"success": False, "error": "period must be an integer"}), 400
        game = app_state.game_service.stop_period(game_id, period_index)
        return jsonify({"success": True, "game": _game_data(game)})

    @app.route("/api/games/<int:game_id>/mvp", methods=["PUT"])
    def set_mvp(game_id: int):
        data = request.get_json(silent=True) or {}
        player_id = data.get("player_id")
        if player_id is None:
            return jsonify({"success": False, "error": "player_id is required"}), 400
        try:
            player_id = int(player_id)
        except (TypeError, ValueError):
            return jsonify({"success": False, "error": "player_id must be an integer"}), 400
        game = app_state.game_service.set_mvp(game_id, player_id)
        return jsonify({"success": True, "game": _game_data(game)})

    @app.route("/api/games/<int:game_id>/players/<int:player_id>/sub-on", methods=["POST"])
    def sub_on(game_id: int, player_id: int):
        game = app_state.game_service.sub_on(game_id, player_id)
        return jsonify({"success": True, "game": _game_data(game)})

    @app.route("/api/games/<int:game_id>/players/<int:player_id>/sub-off", methods=["POST"])
    def sub_off(game_id: int, player_id: int):
        game = app_state.game_service.sub_off(game_id, player_id)
        return jsonify({"success": True, "game": _game_data(game)})

    @app.route("/api/games/<int:game_id>/report.csv", methods=["GET"])
    def export_game_report(game_id: int):
        csv_text = app_state.report_service.export_game_report_csv(game_id)
        return Response(
            csv_text,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=game_{game_id}.csv"},
        )

    # ==================== Players ==================== #

    @app.route("/api/players", methods=["GET"])
    def list_players():
        players = app_state.player_service.list_players()
        return jsonify({"success": True, "players": [_player_data(p) for p in players]})

    @app.route("/api/players", methods=["POST"])
    def create_player():
        data = request.get_json(silent=True) or {}
        player = app_state.player_service.create_player(
            name=str(data.get("name", "")),
            number=data.get("number"),
        )
        return jsonify({"success": True, "player": _player_data(player)}), 201

    @app.route("/api/players/<int:player_id>", methods=["GET"])
    def get_player(player_id: int):
        player = app_state.player_service.get_player(player_id)
        return jsonify({"success": True, "player": _player_data(player)})

    @app.route("/api/players/<int:player_id>", methods=["PUT"])
    def update_player(player_id: int):
        data = request.get_json(silent=True) or {}
        player = app_state.player_service.update_player(
            player_id,
            name=data.get("name"),
            number=data.get("number"),
        )
        return jsonify({"success": True, "player": _player_data(player)})

    return app


def run_web_app(config: Optional[Config] = None) -> None:
    """
    Run the web application.

    Args:
        config: Settings for host, port, store and logging; defaults to the environment
    """
    config = config or Config.from_env()
    configure_logging(config.log_level)
    app = create_app(ServiceFactory(config))
    logger.info("Serving on http://%s:%s", config.host, config.port)
    app.run(host=config.host, port=config.port, debug=False)

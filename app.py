from flask import Flask, jsonify, request
import logging
import time
from typing import Optional

from adapters.demo_adapter import DemoDirectory
from config import ConsoleSettings, build_audit_store
from console.audit_log import AuditLogRecorder, AuditStore

#python app.py
#python scripts/console_cli.py list --search ana

logger = logging.getLogger(__name__)

FETCH_DELAY_SECONDS = 0.3
TOGGLE_DELAY_SECONDS = 0.2


def create_app(
    settings: Optional[ConsoleSettings] = None,
    directory: Optional[DemoDirectory] = None,
    audit_store: Optional[AuditStore] = None,
    simulate_latency: bool = True,
) -> Flask:
    settings = settings or ConsoleSettings.from_env()
    directory = directory or DemoDirectory(
        settings.demo_roster_size,
        failure_probability=settings.failure_probability,
        seed=settings.demo_seed,
    )
    recorder = AuditLogRecorder(audit_store or build_audit_store(settings))

    app = Flask(__name__)
    app.config["CONSOLE_SETTINGS"] = settings
    app.extensions["demo_directory"] = directory
    app.extensions["audit_recorder"] = recorder

    def _pause(seconds: float) -> None:
        if simulate_latency:
            time.sleep(seconds)

    @app.route('/api/employees', methods=['GET'])
    def list_employees():
        _pause(FETCH_DELAY_SECONDS)
        body, status = directory.list_employees()
        return jsonify(body), status

    @app.route('/api/employees', methods=['POST'])
    def update_employee_status():
        payload = request.get_json(force=True, silent=True)
        try:
            if isinstance(payload, dict) and isinstance(payload.get("newStatus"), bool):
                _pause(TOGGLE_DELAY_SECONDS)
            body, status = directory.update_status(payload)
        except Exception as exc:  # pragma: no cover - defensive
            logger.exception("Status update crashed: %s", exc)
            return jsonify({
                "success": False,
                "error": "Internal server error",
                "message": "Could not update the status.",
            }), 500
        if status != 200:
            employee_id = payload.get("employeeId") if isinstance(payload, dict) else None
            logger.warning("Status update for %s refused (%s): %s", employee_id, status, body.get("message"))
        return jsonify(body), status

    @app.route('/api/history')
    def get_history():
        entries = recorder.read_all()
        return jsonify([entry.to_dict() for entry in entries])

    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    app.run(debug=True)

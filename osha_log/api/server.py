from __future__ import annotations
from typing import Any, Callable, Dict, Tuple
import logging

from flask import Blueprint, Flask, Response, current_app, jsonify, request

from osha_log.config.env import configure_logging, get_server_config
from osha_log.dashboard.metrics import compute_dashboard
from osha_log.exports.writers import EXPORT_FILENAMES, serialize_incidents, serialize_summaries
from osha_log.records.schema import record_to_dict
from osha_log.records.validation import (
    RecordValidationError,
    advisory_warnings,
    validate_incident,
    validate_summary,
)
from osha_log.store import RecordNotFound, RecordStore, build_store

log = logging.getLogger(__name__)

bp = Blueprint("osha", __name__)


def _store() -> RecordStore:
    return current_app.config["RECORD_STORE"]


def _payload() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


@bp.errorhandler(RecordValidationError)
def _validation_failed(e: RecordValidationError):
    return jsonify({"error": "validation_failed", "fields": e.errors}), 400


@bp.errorhandler(RecordNotFound)
def _not_found(e: RecordNotFound):
    return jsonify({"error": "not_found", "id": e.record_id}), 404


# collection name -> (store method noun, form validator)
COLLECTIONS: Dict[str, Tuple[str, Callable]] = {
    "incidents": ("incident", validate_incident),
    "summaries": ("summary", validate_summary),
}


def _register_crud(kind: str) -> None:
    noun, validate = COLLECTIONS[kind]

    def op(verb: str) -> Callable:
        return getattr(_store(), f"{verb}_{noun}")

    def list_records():
        return jsonify({kind: [record_to_dict(r) for r in getattr(_store(), f"list_{kind}")()]})

    def create_record():
        payload = _payload()
        payload.pop("id", None)  # ids are assigned at creation
        rec = validate(payload)
        op("save")(rec)
        return jsonify(record_to_dict(rec)), 201

    def get_record(rid: str):
        return jsonify(record_to_dict(op("get")(rid)))

    def replace_record(rid: str):
        payload = _payload()
        if payload.get("id") not in (None, "", rid):
            return jsonify({"error": "id_mismatch"}), 400
        op("get")(rid)  # 404 for unknown ids; PUT does not create
        rec = validate({**payload, "id": rid})
        op("save")(rec)
        return jsonify(record_to_dict(rec))

    def delete_record(rid: str):
        op("delete")(rid)
        return "", 204

    bp.add_url_rule(f"/{kind}", f"list_{kind}", list_records, methods=["GET"])
    bp.add_url_rule(f"/{kind}", f"create_{kind}", create_record, methods=["POST"])
    bp.add_url_rule(f"/{kind}/<rid>", f"get_{kind}", get_record, methods=["GET"])
    bp.add_url_rule(f"/{kind}/<rid>", f"replace_{kind}", replace_record, methods=["PUT"])
    bp.add_url_rule(f"/{kind}/<rid>", f"delete_{kind}", delete_record, methods=["DELETE"])


for _kind in COLLECTIONS:
    _register_crud(_kind)


@bp.get("/dashboard")
def get_dashboard():
    store = _store()
    incidents = store.list_incidents()
    body = compute_dashboard(incidents).to_dict()
    body["warnings"] = advisory_warnings(incidents, store.list_summaries())
    return jsonify(body)


def _csv_download(kind: str, records, serialize) -> Response:
    if not records:
        return jsonify({"error": "no_data", "message": f"There are no {kind} to export."}), 404
    filename = EXPORT_FILENAMES[kind]
    log.info("exporting %d %s as %s", len(records), kind, filename)
    return Response(serialize(records), mimetype="text/csv", headers={
        "Content-Disposition": f'attachment; filename="{filename}"'
    })


@bp.get("/exports/incidents.csv")
def export_incidents():
    return _csv_download("incidents", _store().list_incidents(), serialize_incidents)


@bp.get("/exports/summaries.csv")
def export_summaries():
    return _csv_download("summaries", _store().list_summaries(), serialize_summaries)


def create_app(store: RecordStore | None = None) -> Flask:
    app = Flask(__name__)
    app.config["RECORD_STORE"] = store if store is not None else build_store()
    app.register_blueprint(bp)
    return app


def main() -> None:
    configure_logging()
    cfg = get_server_config()
    app = create_app()
    log.info("serving OSHA log on %s:%d", cfg.host, cfg.port)
    app.run(host=cfg.host, port=cfg.port)


if __name__ == "__main__":
    main()

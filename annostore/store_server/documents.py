import logging

from flask import Blueprint, abort, current_app, jsonify, request

from annostore.store_server.document_store import (
    DocumentNotFound,
    InvalidQuery,
    VersionConflict,
)

bp = Blueprint("documents", __name__)


def get_store():
    return current_app.extensions["document_store"]


def _json_object():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        logging.error(f"{request.method} {request.path} without a JSON object body")
        return abort(400)
    return data


@bp.route("/query", methods=["POST"])
def query():
    data = _json_object()
    try:
        results = get_store().query(data)
    except InvalidQuery as e:
        logging.error(e)
        return abort(400)
    return jsonify(results)


@bp.route("/create", methods=["POST"])
def create():
    doc = get_store().create(_json_object())
    logging.info(f"Created {doc['@id']}")
    return jsonify(doc), 201


def _version(replace):
    data = _json_object()
    try:
        doc = get_store().version(data, replace=replace)
    except DocumentNotFound as e:
        logging.error(f"Cannot version missing document {e}")
        return abort(404)
    except VersionConflict as e:
        logging.error(e)
        return abort(409)
    logging.info(f"Versioned {doc['__rerum']['history']['previous']} as {doc['@id']}")
    return jsonify(doc)


@bp.route("/patch", methods=["PATCH"])
def patch():
    return _version(replace=False)


@bp.route("/update", methods=["PUT"])
def update():
    return _version(replace=True)


@bp.route("/delete/<path:doc_id>", methods=["DELETE"])
def delete(doc_id):
    try:
        get_store().delete(doc_id)
    except DocumentNotFound:
        return abort(404)
    logging.info(f"Deleted {doc_id}")
    return "", 204


@bp.route("/id/<path:doc_id>", methods=["GET"])
def fetch(doc_id):
    try:
        return jsonify(get_store().get(doc_id))
    except DocumentNotFound:
        return abort(404)

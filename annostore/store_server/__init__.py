from envparse import env
from flask import Flask, jsonify

from annostore.config import local
from annostore.shared import cloud_logging
from annostore.store_server.document_store import DocumentStore


def create_app(test_config=None):
    cloud_logging.configure(
        env("STORE_SERVER_LOGGER", default="annostore-store-server"),
        stderr_fallback=False,
    )

    # create and configure the app
    app = Flask(__name__)

    if test_config is None:
        app.config.from_object(local)
    else:
        # load the test config if passed in
        app.config.from_object(test_config)

    # Ids can be URLs, keep their double slashes when they appear in a path.
    app.url_map.merge_slashes = False

    app.extensions["document_store"] = DocumentStore(
        id_prefix=app.config.get("STORE_ID_PREFIX", "")
    )

    @app.route("/status")
    def status_page():
        status = dict()
        status['web'] = 'ok'
        status['documents'] = len(app.extensions["document_store"])
        return jsonify(status)

    from . import documents

    app.register_blueprint(documents.bp)

    return app


"""
env FLASK_APP=annostore.store_server FLASK_ENV=development flask run --port 5002
"""

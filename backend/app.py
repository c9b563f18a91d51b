# app.py
from flask import Flask, request, jsonify

import config
import contextual_logger
import metadata
from cloud_backend import FlushError

# One factory per process; reads GCP_PROJECT / FUNCTION_NAME / FUNCTION_REGION once
loggers = contextual_logger.LoggerFactory.from_env()

app = Flask(__name__)


# --- HTTP function ---
@app.route('/', methods=['GET', 'POST'])
def hello_logs():
    ctx = loggers.for_request(request)
    name = request.args.get('name') or 'World'

    loggers.info(ctx).printf("[HELLO] Request received | name: '%s'", name)
    if name == 'World':
        loggers.notice(ctx).println("[HELLO] No name provided, using default")

    try:
        loggers.flush()
    except FlushError as e:
        loggers.error(ctx).printf("[HELLO] Flush failed | error: %s", e)
        return jsonify({"error": "Failed to flush logs"}), 500

    return jsonify({"message": f"Hello, {name}!"}), 200


# --- Background (event) function ---
def hello_event(data, context):
    """Entry point for event-triggered deployments; logs the event payload."""
    ctx = metadata.new_context(metadata.from_event_context(context))

    loggers.info(ctx).printf("[EVENT] Received | type: %s | resource: %s", context.event_type, context.resource)
    if not data:
        loggers.warning(ctx).println("[EVENT] Empty payload")

    loggers.flush()


if __name__ == '__main__':
    app.run(port=config.FLASK_PORT, debug=True)

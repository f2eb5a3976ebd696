"""
Lissajous GIF HTTP server.

Every request to / renders a fresh animation from the query string:

    GET http://localhost:8000/?cycles=5&res=0.001&size=100&nframes=64&delay=8
"""

import io
import logging
import sys

import numpy as np
from flask import Flask, Response, current_app, request

from .params import RenderParams
from .render import lissajous

log = logging.getLogger(__name__)

# Configuration
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8000
# OPTIONS and HEAD are listed so they render instead of getting automatic replies
METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


def create_app(rng_factory=None):
    """
    Build the Flask app.

    ``rng_factory`` returns a new ``numpy.random.Generator`` per request;
    tests pass a seeded one to make renders repeatable.
    """
    if rng_factory is None:
        rng_factory = np.random.default_rng

    app = Flask(__name__)

    @app.route("/", methods=METHODS)
    def index():
        params = RenderParams.from_args(request.args)
        current_app.logger.debug("Rendering %s", params)

        buf = io.BytesIO()
        lissajous(buf, params, rng=rng_factory())
        return Response(buf.getvalue(), mimetype="image/gif")

    return app


def serve(app, host=DEFAULT_HOST, port=DEFAULT_PORT):
    """Run the blocking HTTP server; exits the process if it cannot listen."""
    try:
        app.run(host=host, port=port, threaded=True, debug=False)
    except OSError as e:
        log.critical("Cannot listen on %s:%d: %s", host, port, e)
        sys.exit(1)

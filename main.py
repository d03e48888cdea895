import sys
import os
import argparse

# Inject the url-service directory into sys.path so the rewriter package resolves
# without an install.
sys.path.append(os.path.join(os.path.dirname(__file__), "url-service"))

from rewriter.core import HOST, PORT, LOG_LEVEL, LOG_FILE, ENDPOINT_PATH, setup_logger, resolve_level
from rewriter.app import create_app


def main(argv=None):
    parser = argparse.ArgumentParser(description="byfood.com URL cleanup and redirection service")
    parser.add_argument("--host", default=HOST, help="Interface to bind")
    parser.add_argument("--port", type=int, default=PORT, help="Port to listen on")
    parser.add_argument("--log-file", default=LOG_FILE, help="Optional log file in addition to stdout")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging and Flask debug mode")
    args = parser.parse_args(argv)

    level = resolve_level("DEBUG" if args.debug else LOG_LEVEL)
    logger = setup_logger(log_file=args.log_file, level=level)

    app = create_app()
    logger.info(f"[SYSTEM] Server running at http://{args.host}:{args.port}{ENDPOINT_PATH} ...")
    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)


if __name__ == "__main__":
    main()

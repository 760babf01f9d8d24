"""Project root entry point for launching the web interface."""

from __future__ import annotations

import os


def main():
    from spantrans.web import create_app

    app = create_app()
    port = int(os.environ.get("SPANTRANS_PORT", "5500"))
    app.run(host="127.0.0.1", port=port, debug=False, threaded=True)


if __name__ == "__main__":
    main()

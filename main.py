"""WSGI entrypoint for `flask --app main run` and similar hosts.

Exposes `app` without shadowing the `lotto_picks/` package.
"""

from lotto_picks import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000, debug=False)

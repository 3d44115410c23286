"""Bundled Assets: serve files held in memory.

The asset bundle is built once at import time, so the process needs no
access to the filesystem while serving. Asset sources have no file
metadata, which rules out weak ETags and Last-Modified; the content hash
is used instead.

A missing asset falls through to the rest of the app, here a 404 route
registered under the same prefix that tells caches not to keep it.

Run with any ASGI server::

    uvicorn app:app
"""

from staticserve import App, AssetFileSource, StaticServeConfig, static_serve

BUNDLE = AssetFileSource(
    {
        "assets/css/app.css": b"main { max-width: 40rem; margin: 0 auto; }\n",
        "assets/js/app.js": b"document.documentElement.classList.add('js');\n",
        "assets/img/pixel.gif": b"GIF89a\x01\x00\x01\x00\x00\x00\x00;",
    },
)

app = App()

app.add_middleware(
    static_serve(
        BUNDLE,
        StaticServeConfig(
            root="/",
            max_age=600,
            enable_strong_etag=True,
            not_found_next=True,
            skipper=lambda request: not request.path.startswith("/assets/"),
        ),
    )
)


@app.route("/assets/{name:path}")
def missing_asset(name: str):
    return f"unknown asset: {name}", 404, {"Cache-Control": "no-store"}


@app.route("/")
def index():
    return '<link rel="stylesheet" href="/assets/css/app.css"><main>Bundled</main>'

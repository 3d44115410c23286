"""Static Site: a CDN origin serving ./public.

Every path is answered from ``public/`` with long-lived caching headers:

- clients may cache for a year, shared caches for an hour
- query strings are refused so the CDN keeps one entry per URL
- files are hashed for a strong ETag; Last-Modified is left off
- dot paths (``.git``, ``.env``) are refused outright

Run with any ASGI server::

    uvicorn app:app
"""

from pathlib import Path

from staticserve import App, StaticServeConfig, default_static_serve

PUBLIC_DIR = Path(__file__).parent / "public"

app = App()


@app.route("/healthz")
def healthz():
    return "ok"


app.mount(
    "/{file:path}",
    default_static_serve(
        StaticServeConfig(
            root=PUBLIC_DIR,
            max_age=365 * 24 * 3600,
            s_maxage=60 * 60,
            deny_query_string=True,
            deny_dot=True,
            disable_last_modified=True,
            enable_strong_etag=True,
            headers={"X-Content-Type-Options": "nosniff"},
        )
    ),
)

"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> AnyResponse

Built-in middleware:
    StaticServe -- Serve files from a FileSource (staticserve.middleware.static)

Import from the submodules directly; this package does not re-export
so that ``staticserve.config`` can depend on the protocol module.
"""

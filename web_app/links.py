"""Short link construction for responses."""

from fastapi import Request


def short_link_for(request: Request, short_code: str, config) -> str:
    """Return the public short link for ``short_code``.

    The origin is taken from ``X-Forwarded-Proto``/``X-Forwarded-Host`` when a
    proxy supplies them, then from the request's own scheme and ``Host``, and
    finally from ``config.base_url``. ``config.path_prefix`` is inserted
    between the origin and the code.
    """
    forwarded_host = request.headers.get("x-forwarded-host")
    host = forwarded_host or request.headers.get("host")

    if host:
        scheme = request.headers.get("x-forwarded-proto") or request.url.scheme
        origin = f"{scheme}://{host}"
    else:
        origin = config.base_url.rstrip("/")

    prefix = config.path_prefix.strip("/")
    if prefix:
        return f"{origin}/{prefix}/{short_code}"
    return f"{origin}/{short_code}"

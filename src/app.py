"""Helper Buddy FastAPI application.

Serves the business-rule layer over HTTP: accounts and referrals, login
lockout checks, service carts and service orders. Each request is wrapped in
the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity
from identity.utils.logging import add_context, clear_context
from ordering.domain import ordering

from shared.http import install_error_handlers

identity.init()
ordering.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/accounts": identity,
    "/referrals": identity,
    "/lockouts": identity,
    "/carts": ordering,
    "/orders": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Helper Buddy API",
    description="Home-services marketplace: carts, orders, referrals and login lockout",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    add_context(request_id=request.headers.get("x-request-id", str(uuid.uuid4())), path=request.url.path)
    try:
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                return await call_next(request)
        # No domain match, pass through (health check, docs, etc.)
        return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from identity.api.routes import account_router, lockout_router, referral_router  # noqa: E402
from ordering.api.routes import cart_router, order_router  # noqa: E402

app.include_router(account_router)
app.include_router(referral_router)
app.include_router(lockout_router)
app.include_router(cart_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "identity": {"name": identity.name},
                "ordering": {"name": ordering.name},
            },
        }
    )

"""Back-office bonus claims service."""

import uvicorn

from ..common import routes as claim_routes
from ..common.app import create_app
from ..common.config import settings
from . import routes

app = create_app(
    service_name="admin-service",
    title="Bonus Claims Admin Service",
    routers=[claim_routes.router, routes.router],
)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

# =============================================================================
# formflow/application.py - FormApp
# =============================================================================
# FastAPI subclass returned by bootstrap(). It adds the two operations
# services call after bootstrapping:
#
#   app = bootstrap(routes=[...])
#   app.use(my_router)          # routers, middleware classes or functions
#   app.listen()                # blocking, runs uvicorn
# =============================================================================

import inspect
import logging
from typing import Any

import uvicorn
from fastapi import APIRouter, FastAPI

from formflow.core.models import BootstrapOptions

logger = logging.getLogger(__name__)


class FormApp(FastAPI):
    """
    A FastAPI application carrying its validated bootstrap options.
    """

    def __init__(self, options: BootstrapOptions, **kwargs: Any):
        super().__init__(**kwargs)
        self.options = options

    def use(self, component: Any, **kwargs: Any) -> "FormApp":
        """
        Attach a router, a middleware class or a middleware function.

        Args:
            component: APIRouter, ASGI middleware class, or
                async def (request, call_next) -> Response
            **kwargs: Passed to include_router / add_middleware

        Returns:
            self, so calls can be chained

        Raises:
            TypeError: If component is none of the above
        """
        if isinstance(component, APIRouter):
            self.include_router(component, **kwargs)
        elif inspect.isclass(component):
            self.add_middleware(component, **kwargs)
        elif callable(component):
            self.middleware("http")(component)
        else:
            raise TypeError(f"Cannot use {component!r}: expected a router or middleware")
        return self

    def listen(self, host: str | None = None, port: int | None = None, **kwargs: Any) -> None:
        """
        Serve the application with uvicorn (blocks until shutdown).

        Host and port default to the bootstrap options. Extra keyword
        arguments go to uvicorn.run (ssl_certfile/ssl_keyfile for https).
        """
        host = host or self.options.host
        port = port or self.options.port
        logger.info(f"Listening on {self.options.protocol}://{host}:{port}")
        uvicorn.run(self, host=host, port=port, **kwargs)

"""Permissive CORS headers on every response, plus a catch-all OPTIONS reply.

A bare ``OPTIONS`` (no ``Access-Control-Request-Method``) on any known path
answers 200 ``{}``; Starlette's ``CORSMiddleware`` only answers real preflights.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def route_methods(app: FastAPI, path: str) -> list[str]:
    methods: set[str] = set()
    for route in app.routes:
        if isinstance(route, APIRoute) and route.path == path:
            methods |= route.methods
    methods -= {"HEAD", "OPTIONS"}
    return sorted(methods) + ["OPTIONS"]


def cors_headers(methods: list[str]) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(methods),
        "Access-Control-Allow-Headers": "Content-Type",
    }


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        methods = route_methods(request.app, request.url.path)
        if request.method == "OPTIONS" and len(methods) > 1:
            response: Response = JSONResponse({})
        else:
            response = await call_next(request)
        response.headers.update(cors_headers(methods))
        return response
